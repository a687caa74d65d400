"""
Тесты для ClaimLedger — балансы и allowances claim-токенов

Проверяемые инварианты:
1. sum(balances) == total_supply после любой операции
2. Балансы неотрицательные, нулевые не хранятся
3. Нехватка баланса/allowance → доменная ошибка без изменений
"""

import pytest

from lpdex.core.domain import ClaimLedger, InsufficientAllowance, InsufficientClaim


@pytest.fixture
def ledger() -> ClaimLedger:
    ledger = ClaimLedger()
    ledger.mint("alice", 100)
    ledger.mint("bob", 50)
    return ledger


def assert_conserved(ledger: ClaimLedger) -> None:
    assert sum(ledger.balances().values()) == ledger.total_supply


class TestMintBurn:

    def test_mint_increases_supply(self, ledger):
        assert ledger.total_supply == 150
        assert ledger.balance_of("alice") == 100
        assert_conserved(ledger)

    def test_unknown_holder_has_zero(self, ledger):
        assert ledger.balance_of("carol") == 0

    def test_burn_decreases_supply(self, ledger):
        ledger.burn("alice", 40)
        assert ledger.balance_of("alice") == 60
        assert ledger.total_supply == 110
        assert_conserved(ledger)

    def test_burn_to_zero_removes_holder(self, ledger):
        ledger.burn("bob", 50)
        assert "bob" not in ledger.balances()

    def test_burn_over_balance(self, ledger):
        with pytest.raises(InsufficientClaim) as exc_info:
            ledger.burn("bob", 51)
        assert exc_info.value.details["balance"] == 50
        assert ledger.total_supply == 150

    def test_negative_mint_rejected(self, ledger):
        with pytest.raises(ValueError):
            ledger.mint("alice", -1)


class TestTransfer:

    def test_transfer_keeps_supply(self, ledger):
        ledger.transfer("alice", "carol", 30)
        assert ledger.balance_of("alice") == 70
        assert ledger.balance_of("carol") == 30
        assert ledger.total_supply == 150
        assert_conserved(ledger)

    def test_self_transfer(self, ledger):
        ledger.transfer("alice", "alice", 100)
        assert ledger.balance_of("alice") == 100

    def test_transfer_over_balance(self, ledger):
        with pytest.raises(InsufficientClaim):
            ledger.transfer("bob", "alice", 51)
        assert ledger.balance_of("bob") == 50


class TestAllowance:

    def test_approve_and_spend(self, ledger):
        ledger.approve("alice", "bob", 20)
        ledger.spend_allowance("alice", "bob", 15)
        assert ledger.allowance("alice", "bob") == 5

    def test_spend_over_allowance(self, ledger):
        ledger.approve("alice", "bob", 10)
        with pytest.raises(InsufficientAllowance):
            ledger.spend_allowance("alice", "bob", 11)
        assert ledger.allowance("alice", "bob") == 10

    def test_approve_zero_revokes(self, ledger):
        ledger.approve("alice", "bob", 10)
        ledger.approve("alice", "bob", 0)
        assert ledger.allowances() == {}


class TestLoad:

    def test_load_replaces_contents(self, ledger):
        ledger.load(balances={"dave": 7, "erin": 0}, allowances={("dave", "erin"): 3})
        assert ledger.balances() == {"dave": 7}
        assert ledger.total_supply == 7
        assert ledger.allowance("dave", "erin") == 3
