"""Shared test fixtures - fake message provider and a fast-ticking engine."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from lovecalc.api.deps import get_engine
from lovecalc.core.session_engine import SessionEngine


class FakeProvider:
    """Message provider that records calls and optionally waits on a gate."""

    def __init__(self, message: str = "You two make the sun jealous."):
        self.message = message
        self.calls: list[tuple[str, str, int]] = []
        self.gate: asyncio.Event | None = None

    async def generate(self, name1: str, name2: str, percentage: int) -> str:
        self.calls.append((name1, name2, percentage))
        if self.gate is not None:
            await self.gate.wait()
        return self.message


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
async def engine(provider):
    """Engine with a zero tick interval so calculations finish immediately."""
    eng = SessionEngine(provider, tick_interval=0)
    yield eng
    await eng.aclose()


@pytest.fixture
async def client(engine):
    """Async HTTP test client wired to the test engine."""
    from lovecalc.main import app

    app.dependency_overrides[get_engine] = lambda: engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
