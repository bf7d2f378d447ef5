"""Models shared across the search, history and view layers."""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict

ResultSet = Tuple[str, ...]


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    SETTLED = "settled"


class SessionState(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"


@dataclass(slots=True, eq=False)
class SearchRequest:
    """Handle for one outstanding provider query.

    ``generation`` increases monotonically per session; a settle is applied
    only while the handle is still the session's current pending request.
    """

    term: str
    generation: int
    status: RequestStatus = RequestStatus.PENDING
    task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    def cancel(self) -> None:
        """Mark the handle cancelled and signal the transport, best-effort."""

        if self.status is not RequestStatus.PENDING:
            return
        self.status = RequestStatus.CANCELLED
        if self.task is not None and not self.task.done():
            self.task.cancel()


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    created_at: datetime


__all__ = [
    "HistoryEntry",
    "RequestStatus",
    "ResultSet",
    "SearchRequest",
    "SessionState",
]
