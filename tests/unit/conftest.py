"""Общие fixtures: ledger-ы, sink и движок пула."""

import pytest

from lpdex.core.domain import parse_units
from lpdex.engine import InMemoryEventSink, LiquidityEngine, PoolConfig
from lpdex.ledger import InMemoryTokenLedger

DEPLOYER = "deployer"
ALICE = "alice"
POOL_ADDRESS = "dex"


@pytest.fixture
def token() -> InMemoryTokenLedger:
    """Внешний токен с начальным выпуском на DEPLOYER и ALICE."""
    ledger = InMemoryTokenLedger(address="balloons", symbol="BAL")
    ledger.mint(DEPLOYER, parse_units("1000000"))
    ledger.mint(ALICE, parse_units("1000000"))
    return ledger


@pytest.fixture
def base() -> InMemoryTokenLedger:
    """Ledger base asset (нативный актив)."""
    ledger = InMemoryTokenLedger(address="native", symbol="ETH")
    ledger.mint(DEPLOYER, parse_units("100"))
    ledger.mint(ALICE, parse_units("100"))
    return ledger


@pytest.fixture
def sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def dex(token, base, sink) -> LiquidityEngine:
    return LiquidityEngine(
        token_ledger=token,
        base_ledger=base,
        config=PoolConfig(pool_address=POOL_ADDRESS),
        event_sink=sink,
    )