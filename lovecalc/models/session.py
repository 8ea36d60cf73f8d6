"""Session model - the single in-memory record of one calculation."""

from dataclasses import dataclass
from enum import Enum


class SessionStatus(str, Enum):
    IDLE = "idle"
    CALCULATING = "calculating"
    LOADING_MESSAGE = "loading-message"
    RESULT = "result"


@dataclass
class Session:
    name1: str = ""
    name2: str = ""
    status: SessionStatus = SessionStatus.IDLE

    # Set once names pass validation; cleared again on reset
    percentage: int | None = None
    progress: int | None = None
    message: str = ""

    # Inline message shown under the name inputs
    validation_error: str | None = None
