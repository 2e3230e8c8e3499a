"""
XState-compatible capture state machine using xstate-python.

Loads standard XState JSON (id, initial, states with on: { EVENT: target }).
The same JSON can be opened in Stately Studio or used by a JS front end.
"""

import json
import os
from pathlib import Path

from xstate.machine import Machine


def get_machine_path() -> Path:
    """Return path to the capture machine JSON (CAPTURE_MACHINE_PATH env or the packaged file)."""
    default = Path(__file__).resolve().parent / "flows" / "capture_machine.json"
    path = os.environ.get("CAPTURE_MACHINE_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_machine(path: Path | None = None) -> dict:
    if path is None:
        path = get_machine_path()
    raw = path.read_text(encoding="utf-8")
    config = json.loads(raw)
    if "initial" not in config or "states" not in config:
        raise ValueError("Machine must have 'initial' and 'states'")
    if config["initial"] not in config["states"]:
        raise ValueError(f"initial state '{config['initial']}' must be a state id")
    return config


class XStateCaptureMachine:
    """Adapts an XState config to the CaptureMachine port."""

    def __init__(self, config: dict | None = None) -> None:
        self._config = config if config is not None else load_machine()
        self._machine = Machine(self._config)
        self.initial = self._config["initial"]

    @property
    def states(self) -> list[str]:
        return list(self._config["states"])

    def transition(self, state_value: str, event: str) -> str | None:
        """
        Return next state value for (state_value, event), or None if no transition.
        """
        try:
            state = self._machine.state_from(state_value)
            next_state = self._machine.transition(state, event)
        except (ValueError, KeyError):
            return None
        if next_state.value == state_value:
            return None
        return next_state.value
