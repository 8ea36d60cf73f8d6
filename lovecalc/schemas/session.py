"""Session-related Pydantic schemas."""

from pydantic import BaseModel

from lovecalc.models.session import SessionStatus


class CalculateRequest(BaseModel):
    """Names submitted from the input screen (validated by the engine)."""
    name1: str = ""
    name2: str = ""


class SessionView(BaseModel):
    """Read-only snapshot of the session for renderers."""
    status: SessionStatus
    name1: str
    name2: str
    percentage: int | None = None
    progress: int | None = None
    message: str = ""
    error: str | None = None
    generation: int = 0
