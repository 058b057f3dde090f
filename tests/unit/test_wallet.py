from decimal import Decimal

from ads_domain.types import WalletTransaction, WalletTransactionType
from ads_domain.wallet import calculate_wallet_balance, validate_wallet_transaction


def tx(kind, amount):
    return WalletTransaction(type=kind, amount=Decimal(amount))


def test_credits_add_and_debits_subtract():
    assert calculate_wallet_balance(Decimal("100"), tx("DEPOSIT", "50")) == Decimal("150")
    assert calculate_wallet_balance(Decimal("100"), tx("BONUS", "5")) == Decimal("105")
    assert calculate_wallet_balance(Decimal("100"), tx("SPEND", "30")) == Decimal("70")
    assert calculate_wallet_balance(Decimal("100"), tx("PENALTY", "10")) == Decimal("90")


def test_debit_never_goes_below_zero():
    assert calculate_wallet_balance(Decimal("10"), tx("SPEND", "25")) == Decimal("0")


def test_transaction_type_is_coerced():
    assert tx("REFUND", "1").type is WalletTransactionType.REFUND


def test_non_positive_amount_is_rejected():
    result = validate_wallet_transaction(tx("DEPOSIT", "0"), Decimal("10"))
    assert not result.is_valid
    assert result.errors == ["Transaction amount must be greater than 0"]


def test_withdrawal_needs_balance():
    result = validate_wallet_transaction(tx("WITHDRAWAL", "20"), Decimal("10"))
    assert result.errors == ["Insufficient balance for this transaction"]


def test_spend_limits_are_reported_together():
    result = validate_wallet_transaction(
        tx("SPEND", "20"), Decimal("100"), daily_spend_limit=Decimal("10"), monthly_spend_limit=Decimal("15")
    )
    assert result.errors == [
        "Transaction amount exceeds daily spend limit of 10",
        "Transaction amount exceeds monthly spend limit of 15",
    ]


def test_zero_limits_are_ignored():
    result = validate_wallet_transaction(tx("SPEND", "20"), Decimal("100"), daily_spend_limit=0)
    assert result.is_valid
