"""API test fixtures — FastAPI test client bound to a per-test ledger.

Invariants:
    - Every test gets a fresh TransactionLedger on a fake clock
    - get_ledger dependency overridden; app.state.ledger set for the readiness probe

Design Decisions:
    - ASGITransport does not run the lifespan, so the fixture installs the ledger itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

from txledger.api.dependencies import get_ledger
from txledger.main import app


@pytest.fixture
async def client(ledger):
    """FastAPI test client with the ledger dependency overridden."""
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.state.ledger = ledger

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.ledger
