"""
FastAPI backend: people directory REST API plus QR / photo capture endpoints.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from collections import OrderedDict
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI, File, Header, HTTPException, Request, UploadFile  # noqa: E402
from fastapi.responses import JSONResponse, Response  # noqa: E402
from pydantic import BaseModel, Field  # noqa: E402

from roster.application import (  # noqa: E402
    DirectoryService,
    Invalid,
    ListPage,
    ListState,
    ListViewController,
    NotFound,
    NothingToExport,
    PersonForm,
    PersonPatch,
    RosterError,
    SortKey,
    StorageError,
    ViewMode,
    build_page,
    export_csv,
    parse_scanned_payload,
    photo_from_upload,
)
from roster.application.listing import MAX_PAGE_SIZE  # noqa: E402
from roster.domain import ROLES, Person  # noqa: E402
from roster.infrastructure import (  # noqa: E402
    Settings,
    build_repository,
    build_service,
    ensure_email_constraint,
    get_driver,
    load_seed,
    person_qr_png,
)
from roster.infrastructure.config import STORE_NEO4J  # noqa: E402

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

SESSION_ID_HEADER = "X-Session-Id"
DEFAULT_SESSION_ID = "default"
MAX_SESSIONS = 256

# Per-session list view state (search, filter, sort, page, view mode).
# Least recently used sessions are dropped past MAX_SESSIONS.
_controllers: OrderedDict[str, ListViewController] = OrderedDict()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    app.state.settings = settings
    app.state.driver = None
    _controllers.clear()
    try:
        if settings.store == STORE_NEO4J:
            app.state.driver = get_driver(settings)
            ensure_email_constraint(app.state.driver)
        repository = build_repository(settings, driver=app.state.driver)
        service = build_service(settings, repository)
        if settings.seed:
            service.populate_initial_data(load_seed(settings.seed_path))
        app.state.service = service
        logger.info("Directory ready (store=%s)", settings.store)
        yield
    finally:
        if app.state.driver is not None:
            app.state.driver.close()


app = FastAPI(title="Roster API", lifespan=lifespan)


def get_service(request: Request) -> DirectoryService:
    return request.app.state.service


def get_controller(session_id: str | None, request: Request) -> ListViewController:
    key = (session_id or "").strip() or DEFAULT_SESSION_ID
    if key in _controllers:
        _controllers.move_to_end(key)
        return _controllers[key]
    settings: Settings = request.app.state.settings
    _controllers[key] = ListViewController(
        get_service(request), ListState(page_size=settings.page_size)
    )
    while len(_controllers) > MAX_SESSIONS:
        evicted, _ = _controllers.popitem(last=False)
        logger.info("Dropped list view state for session %s", evicted)
    return _controllers[key]


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.warning("Storage error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(NothingToExport)
async def nothing_to_export_handler(request: Request, exc: NothingToExport):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RosterError)
async def roster_error_handler(request: Request, exc: RosterError):
    logger.warning("Request %s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# --- Schemas ---


class PersonBody(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    role: str = ""
    photo: str | None = None


class PersonPatchBody(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    photo: str | None = None


class PersonOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    role: str
    photo: str
    registered_at: str

    @classmethod
    def from_person(cls, person: Person) -> "PersonOut":
        return cls(
            id=person.id,
            name=person.name,
            email=person.email,
            phone=person.phone,
            role=person.role,
            photo=person.photo,
            registered_at=person.registered_at.isoformat(),
        )


class ListPageOut(BaseModel):
    items: list[PersonOut]
    page: int
    page_size: int
    total_pages: int
    filtered_count: int
    total_count: int
    page_numbers: list[int | None]
    has_previous: bool
    has_next: bool
    view: ViewMode
    page_info: str

    @classmethod
    def from_page(cls, page: ListPage) -> "ListPageOut":
        return cls(
            items=[PersonOut.from_person(p) for p in page.items],
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            filtered_count=page.filtered_count,
            total_count=page.total_count,
            page_numbers=page.page_numbers,
            has_previous=page.has_previous,
            has_next=page.has_next,
            view=page.view,
            page_info=page.page_info,
        )


class ViewPatchBody(BaseModel):
    search: str | None = None
    role: str | None = None
    sort: SortKey | None = None
    page_size: int | None = Field(default=None, ge=1, le=MAX_PAGE_SIZE)
    view: ViewMode | None = None
    page: int | None = None


class FormOut(BaseModel):
    name: str
    email: str
    phone: str
    role: str
    payload: str


def _invalid(result: Invalid) -> HTTPException:
    return HTTPException(status_code=400, detail={"errors": result.errors})


def _csv_response(people: list[Person]) -> Response:
    export = export_csv(people)
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/roles")
def list_roles():
    return list(ROLES)


@app.get("/stats")
def stats(request: Request):
    s = get_service(request).stats()
    return {
        "total": s.total,
        "registered_today": s.registered_today,
        "as_of": s.as_of.isoformat(),
    }


# --- REST: people ---


@app.get("/people", response_model=ListPageOut)
def list_people(
    request: Request,
    search: str = "",
    role: str = "",
    sort: SortKey = SortKey.NAME,
    page: int = 1,
    page_size: int | None = None,
    view: ViewMode = ViewMode.GRID,
):
    settings: Settings = request.app.state.settings
    size = page_size or settings.page_size
    if not 1 <= size <= MAX_PAGE_SIZE:
        raise HTTPException(status_code=422, detail="page_size out of range")
    state = ListState(
        search=search.strip(),
        role=role.strip(),
        sort=sort,
        page=page,
        page_size=size,
        view=view,
    )
    return ListPageOut.from_page(build_page(get_service(request).list_people(), state))


@app.get("/people/export.csv")
def export_people(request: Request, search: str = "", role: str = "", sort: SortKey = SortKey.NAME):
    state = ListState(search=search.strip(), role=role.strip(), sort=sort)
    page = build_page(get_service(request).list_people(), state)
    return _csv_response(page.filtered)


@app.post("/people", status_code=201, response_model=PersonOut)
def create_person(body: PersonBody, request: Request):
    result = get_service(request).add_person(
        PersonForm(
            name=body.name,
            email=body.email,
            phone=body.phone,
            role=body.role,
            photo=body.photo,
        )
    )
    if isinstance(result, Invalid):
        raise _invalid(result)
    return PersonOut.from_person(result.person)


@app.get("/people/{person_id}", response_model=PersonOut)
def get_person(person_id: str, request: Request):
    person = get_service(request).get_person(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return PersonOut.from_person(person)


@app.patch("/people/{person_id}", response_model=PersonOut)
def update_person(person_id: str, body: PersonPatchBody, request: Request):
    result = get_service(request).update_person(
        person_id,
        PersonPatch(
            name=body.name,
            email=body.email,
            phone=body.phone,
            role=body.role,
            photo=body.photo,
        ),
    )
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Person not found")
    if isinstance(result, Invalid):
        raise _invalid(result)
    return PersonOut.from_person(result.person)


@app.delete("/people/{person_id}", status_code=204)
def delete_person(person_id: str, request: Request):
    if not get_service(request).delete_person(person_id):
        raise HTTPException(status_code=404, detail="Person not found")
    return Response(status_code=204)


@app.get("/people/{person_id}/qr.png")
def person_qr(person_id: str, request: Request):
    person = get_service(request).get_person(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return Response(content=person_qr_png(person), media_type="image/png")


# --- REST: stateful list view ---


@app.get("/view", response_model=ListPageOut)
def get_view(
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    controller = get_controller(x_session_id, request)
    return ListPageOut.from_page(controller.refresh())


@app.patch("/view", response_model=ListPageOut)
def update_view(
    body: ViewPatchBody,
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    """Apply each provided change in order: search, role, sort, page size, view, page."""
    controller = get_controller(x_session_id, request)
    page = controller.refresh()
    if body.search is not None:
        page = controller.set_search(body.search)
    if body.role is not None:
        page = controller.set_role_filter(body.role)
    if body.sort is not None:
        page = controller.set_sort(body.sort)
    if body.page_size is not None:
        page = controller.set_page_size(body.page_size)
    if body.view is not None:
        page = controller.set_view(body.view)
    if body.page is not None:
        page = controller.go_to_page(body.page)
    return ListPageOut.from_page(page)


@app.post("/view/page/{number}", response_model=ListPageOut)
def go_to_page(
    number: int,
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    controller = get_controller(x_session_id, request)
    controller.refresh()
    return ListPageOut.from_page(controller.go_to_page(number))


@app.get("/view/export.csv")
def export_view(
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    controller = get_controller(x_session_id, request)
    return _csv_response(controller.refresh().filtered)


# --- Capture: images taken by the client camera ---


@app.post("/capture/qr", response_model=FormOut)
def capture_qr(file: UploadFile = File(...)):
    """Decode a QR code from an uploaded frame and return pre-filled form fields."""
    from roster.infrastructure.camera import OpenCvQrDecoder

    data = file.file.read()
    photo_from_upload(data, file.content_type)
    payload = OpenCvQrDecoder().decode_image(data)
    if not payload:
        raise HTTPException(status_code=422, detail="No QR code found in the image.")
    form = parse_scanned_payload(payload)
    logger.info("QR payload decoded for %r", form.email or form.name)
    return FormOut(
        name=form.name,
        email=form.email,
        phone=form.phone,
        role=form.role,
        payload=payload,
    )


@app.post("/capture/photo")
def capture_photo(file: UploadFile = File(...)):
    """Turn an uploaded or captured image into a value for the photo field."""
    data = file.file.read()
    return {"photo": photo_from_upload(data, file.content_type)}
