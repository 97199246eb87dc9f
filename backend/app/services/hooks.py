"""Explicit pre/post extension points for the panel pages."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Events(str, enum.Enum):
    admin_script_start = "admin_script_start"
    admin_script_end = "admin_script_end"
    reseller_script_start = "reseller_script_start"
    reseller_script_end = "reseller_script_end"


@dataclass
class HookEvent:
    name: Events
    params: dict[str, Any] = field(default_factory=dict)

    def get_param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)


Listener = Callable[[HookEvent], None]


class HookRegistry:
    def __init__(self) -> None:
        self._listeners: dict[Events, list[Listener]] = {}

    def register(self, event: Events, listener: Listener) -> None:
        self._listeners.setdefault(Events(event), []).append(listener)

    def listeners(self, event: Events) -> list[Listener]:
        return list(self._listeners.get(Events(event), []))

    def dispatch(self, event: Events, **params: Any) -> HookEvent:
        """Call listeners in registration order. Listener errors propagate."""
        ev = HookEvent(name=Events(event), params=params)
        for listener in self.listeners(ev.name):
            listener(ev)
        logger.debug("hook dispatched event=%s listeners=%s", ev.name.value, len(self._listeners.get(ev.name, [])))
        return ev
