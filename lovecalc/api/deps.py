"""Shared FastAPI dependencies."""

from starlette.requests import HTTPConnection

from lovecalc.core.session_engine import SessionEngine


def get_engine(connection: HTTPConnection) -> SessionEngine:
    """Return the session engine created in the app lifespan."""
    return connection.app.state.engine
