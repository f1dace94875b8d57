from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    title: str
    description: str | None
    level: NoticeLevel


class Notifier:
    """Collects user-facing notices; failures never propagate past it."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def success(self, title: str, description: str | None = None) -> None:
        self.notices.append(Notice(title=title, description=description, level=NoticeLevel.SUCCESS))

    def error(self, title: str, description: str | None = None) -> None:
        logger.warning("%s: %s", title, description)
        self.notices.append(Notice(title=title, description=description, level=NoticeLevel.ERROR))

    @property
    def errors(self) -> list[Notice]:
        return [notice for notice in self.notices if notice.level == NoticeLevel.ERROR]

    def last_error(self) -> Notice | None:
        errors = self.errors
        return errors[-1] if errors else None
