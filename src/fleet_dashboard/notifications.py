"""Toast-style notifications raised by the data layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal, Protocol

Severity = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = "default"

    def to_dict(self) -> dict:
        return asdict(self)


class Notifier(Protocol):
    """Anything that can display a notification. Fire-and-forget."""

    def notify(self, title: str, description: str, severity: Severity = "default") -> None:
        ...


class ToastQueue:
    """In-memory notifier; the dashboard drains it on each poll."""

    def __init__(self, max_pending: int = 50) -> None:
        self._pending: list[Notification] = []
        self._max_pending = max_pending

    def notify(self, title: str, description: str, severity: Severity = "default") -> None:
        self._pending.append(Notification(title, description, severity))
        # Oldest toasts are dropped once the queue is full
        if len(self._pending) > self._max_pending:
            del self._pending[: len(self._pending) - self._max_pending]

    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications."""
        drained, self._pending = self._pending, []
        return drained
