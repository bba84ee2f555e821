"""In-memory field store for the resume draft being edited."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any

from freelanly.errors import ValidationError
from freelanly.models.resume import DRAFT_FIELDS, empty_draft

logger = logging.getLogger(__name__)

Subscriber = Callable[[dict[str, Any]], None]


class FieldStore:
    """Holds draft field values and notifies subscribers of each change.

    Values are untyped here; the section assemblers validate them before
    they reach the store. Only known draft field names are accepted.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._fields: dict[str, Any] = empty_draft()
        self._subscribers: list[Subscriber] = []
        if initial:
            self._check_names(initial)
            self._fields.update(copy.deepcopy(dict(initial)))

    def get(self, name: str, default: Any = None) -> Any:
        return copy.deepcopy(self._fields.get(name, default))

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of every field."""
        return copy.deepcopy(self._fields)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def update_field(self, name: str, value: Any) -> None:
        """Set a single field. Repeating an identical value is a no-op."""
        self.update_fields({name: value})

    def update_fields(self, fields: Mapping[str, Any]) -> None:
        """Merge several fields at once.

        An unknown name rejects the whole batch; nothing is applied.
        """
        self._check_names(fields)
        changed = {
            name: copy.deepcopy(value)
            for name, value in fields.items()
            if self._fields.get(name) != value
        }
        if not changed:
            return
        self._fields.update(changed)
        logger.debug("Draft fields updated: %s", sorted(changed))
        self._notify()

    def load(self, fields: Mapping[str, Any]) -> None:
        """Replace the whole draft, e.g. when reopening a saved resume."""
        self._check_names(fields)
        fresh = empty_draft()
        fresh.update(copy.deepcopy(dict(fields)))
        if fresh == self._fields:
            return
        self._fields = fresh
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self.snapshot())

    @staticmethod
    def _check_names(fields: Mapping[str, Any]) -> None:
        unknown = sorted(set(fields) - DRAFT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown draft fields: {', '.join(unknown)}", unknown)
