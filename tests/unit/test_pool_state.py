"""
Тесты для PoolState — агрегат пула, снапшоты и инварианты
"""

import pytest
from pydantic import ValidationError

from lpdex.core.domain import InvariantViolation, PoolPhase, PoolSnapshot, PoolState


@pytest.fixture
def state() -> PoolState:
    state = PoolState(pool_address="dex", token_ledger_address="balloons")
    state.credit_reserves(5, 5000)
    state.claims.mint("alice", 3)
    state.claims.mint("bob", 2)
    state.claims.approve("alice", "bob", 1)
    return state


class TestPhase:

    def test_new_state_uninitialized(self):
        state = PoolState(pool_address="dex", token_ledger_address="balloons")
        assert state.phase == PoolPhase.UNINITIALIZED
        assert not state.is_initialized
        state.check_invariants()

    def test_active_when_supply_positive(self, state):
        assert state.phase == PoolPhase.ACTIVE
        assert state.is_initialized


class TestReserves:

    def test_debit(self, state):
        state.debit_reserves(1, 1000)
        assert (state.base_reserve, state.token_reserve) == (4, 4000)

    def test_debit_over_reserve(self, state):
        with pytest.raises(InvariantViolation):
            state.debit_reserves(6, 0)
        assert state.base_reserve == 5


class TestSnapshotRestore:

    def test_snapshot_contents(self, state):
        snapshot = state.snapshot()
        assert snapshot.phase == PoolPhase.ACTIVE
        assert snapshot.claim_supply == 5
        assert snapshot.claim_balances == {"alice": 3, "bob": 2}
        assert snapshot.claim_allowances == {"alice": {"bob": 1}}

    def test_snapshot_is_frozen(self, state):
        snapshot = state.snapshot()
        with pytest.raises(ValidationError):
            snapshot.base_reserve = 0

    def test_restore_reverts_all_changes(self, state):
        snapshot = state.snapshot()

        state.credit_reserves(1, 1000)
        state.claims.mint("carol", 1)
        state.claims.approve("alice", "bob", 0)

        state.restore(snapshot)
        assert state.snapshot() == snapshot

    def test_negative_reserve_rejected_by_model(self):
        with pytest.raises(ValidationError):
            PoolSnapshot(
                pool_address="dex",
                token_ledger_address="balloons",
                phase=PoolPhase.UNINITIALIZED,
                base_reserve=-1,
                token_reserve=0,
                claim_supply=0,
            )


class TestInvariants:

    def test_consistent_state_passes(self, state):
        state.check_invariants()

    def test_supply_diverged_from_base(self, state):
        state.claims.mint("carol", 1)
        with pytest.raises(InvariantViolation, match="base reserve"):
            state.check_invariants()

    def test_orphan_token_reserve(self):
        state = PoolState(pool_address="dex", token_ledger_address="balloons")
        state.token_reserve = 10
        with pytest.raises(InvariantViolation, match="token reserve"):
            state.check_invariants()

    def test_negative_reserve(self, state):
        state.token_reserve = -1
        with pytest.raises(InvariantViolation, match="Negative reserve"):
            state.check_invariants()

    def test_violation_carries_code(self, state):
        state.base_reserve = 4
        with pytest.raises(InvariantViolation) as exc_info:
            state.check_invariants()
        assert exc_info.value.code == "invariant_violation"
