"""Root conftest — shared ledger fixtures."""

import pytest

from txledger.core.ledger import TransactionLedger
from tests.ledger_helpers import FakeClock


@pytest.fixture
def clock():
    """Clock starting at t=0 ms."""
    return FakeClock()


@pytest.fixture
def ledger(clock):
    return TransactionLedger(clock=clock)
