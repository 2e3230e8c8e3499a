"""In-memory implementation of DirectoryRepository (no persistence)."""

from roster.domain import Person


class InMemoryDirectoryRepository:
    """Stores records in memory. Order preserved by insertion."""

    def __init__(self, people: list[Person] | None = None) -> None:
        self._by_id: dict[str, Person] = {}
        self._order: list[str] = []
        for person in people or []:
            self.add(person)

    def add(self, person: Person) -> None:
        if person.id in self._by_id:
            return
        self._by_id[person.id] = person
        self._order.append(person.id)

    def get_by_id(self, person_id: str) -> Person | None:
        return self._by_id.get(person_id)

    def list_all(self) -> list[Person]:
        return [self._by_id[pid] for pid in self._order if pid in self._by_id]

    def update(self, person: Person) -> bool:
        if person.id not in self._by_id:
            return False
        self._by_id[person.id] = person
        return True

    def delete(self, person_id: str) -> bool:
        if self._by_id.pop(person_id, None) is None:
            return False
        self._order.remove(person_id)
        return True

    def clear(self) -> None:
        self._by_id.clear()
        self._order.clear()
