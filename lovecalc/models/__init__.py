"""In-memory models package."""

from lovecalc.models.session import Session, SessionStatus

__all__ = ["Session", "SessionStatus"]
