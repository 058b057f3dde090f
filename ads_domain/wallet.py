"""Seller wallet arithmetic and transaction validation."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from .money import to_decimal
from .types import (
    CREDIT_TRANSACTIONS,
    DEBIT_TRANSACTIONS,
    ValidationResult,
    WalletTransaction,
    WalletTransactionType,
)

Amount = Union[Decimal, int, float, str]


def calculate_wallet_balance(current_balance: Amount, transaction: WalletTransaction) -> Decimal:
    """Balance after applying ``transaction``. Debits never take it below zero."""
    balance = to_decimal(current_balance)
    amount = to_decimal(transaction.amount)
    if transaction.type in CREDIT_TRANSACTIONS:
        return balance + amount
    if transaction.type in DEBIT_TRANSACTIONS:
        return max(Decimal("0"), balance - amount)
    return balance


def validate_wallet_transaction(
    transaction: WalletTransaction,
    current_balance: Amount,
    daily_spend_limit: Optional[Amount] = None,
    monthly_spend_limit: Optional[Amount] = None,
) -> ValidationResult:
    """Collect every rule ``transaction`` breaks. Zero or missing limits are ignored."""
    errors = []
    amount = to_decimal(transaction.amount)
    balance = to_decimal(current_balance)

    if amount <= 0:
        errors.append("Transaction amount must be greater than 0")

    if transaction.type in (WalletTransactionType.WITHDRAWAL, WalletTransactionType.SPEND) and amount > balance:
        errors.append("Insufficient balance for this transaction")

    if transaction.type is WalletTransactionType.SPEND:
        if daily_spend_limit and amount > to_decimal(daily_spend_limit):
            errors.append(f"Transaction amount exceeds daily spend limit of {daily_spend_limit}")
        if monthly_spend_limit and amount > to_decimal(monthly_spend_limit):
            errors.append(f"Transaction amount exceeds monthly spend limit of {monthly_spend_limit}")

    return ValidationResult(is_valid=not errors, errors=errors)
