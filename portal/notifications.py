"""Transient user notifications (the web client's toasts)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

import structlog

logger = structlog.get_logger()

LEVELS = ("success", "error", "info")


@dataclass
class Notice:
    """A single notification shown to the user."""

    level: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """Collects notices for the front end to display.

    An optional listener is called for every notice, letting a terminal
    front end print them as they happen.
    """

    def __init__(self, listener: Optional[Callable[[Notice], None]] = None):
        self.notices: List[Notice] = []
        self.listener = listener

    def notify(self, message: str, level: str = "info") -> Notice:
        if level not in LEVELS:
            raise ValueError(f"Unknown notice level: {level}")

        notice = Notice(level=level, message=message)
        self.notices.append(notice)

        log_method = logger.warning if level == "error" else logger.info
        log_method("User notice", level=level, notice=message)

        if self.listener:
            self.listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.notify(message, "success")

    def error(self, message: str) -> Notice:
        return self.notify(message, "error")

    def info(self, message: str) -> Notice:
        return self.notify(message, "info")

    def drain(self) -> List[Notice]:
        """Return and forget all pending notices."""
        notices, self.notices = self.notices, []
        return notices

    @property
    def last(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None
