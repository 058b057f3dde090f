"""Seller wallets: creation, admin deposits, withdrawals and access control."""

from decimal import Decimal

from ads_api.models import SellerWallet
from conftest import bearer, make_user


def open_wallet(client, seller, headers, **payload):
    return client.post(f"/ads/wallets/seller/{seller.id}", json=payload, headers=headers)


def test_seller_opens_empty_wallet(client, seller, seller_headers):
    response = open_wallet(client, seller, seller_headers, initial_balance="500.00", daily_spend_limit="20.00")
    assert response.status_code == 201
    wallet = response.json()
    assert wallet["seller_id"] == seller.id
    assert wallet["tenant_id"] == "tenant-a"
    assert wallet["currency"] == "TRY"
    # Sellers cannot mint their own opening balance
    assert Decimal(wallet["balance"]) == Decimal("0")
    assert Decimal(wallet["daily_spend_limit"]) == Decimal("20.00")


def test_admin_opens_funded_wallet(client, seller, admin_headers, seller_headers):
    response = open_wallet(client, seller, admin_headers, initial_balance="25.00")
    assert response.status_code == 201
    wallet = response.json()
    assert Decimal(wallet["balance"]) == Decimal("25.00")
    assert Decimal(wallet["total_deposited"]) == Decimal("25.00")

    [opening] = client.get(f"/ads/wallets/{wallet['id']}/transactions", headers=seller_headers).json()
    assert opening["type"] == "DEPOSIT"
    assert opening["description"] == "Opening balance"


def test_second_wallet_conflicts(client, seller, seller_headers):
    assert open_wallet(client, seller, seller_headers).status_code == 201
    response = open_wallet(client, seller, seller_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "Seller already has a wallet"


def test_seller_cannot_touch_another_sellers_wallet(client, seller, other_seller, seller_headers, other_seller_headers):
    wallet = open_wallet(client, seller, seller_headers).json()

    assert open_wallet(client, seller, other_seller_headers).status_code == 403
    assert client.get(f"/ads/wallets/seller/{seller.id}", headers=other_seller_headers).status_code == 403
    response = client.get(f"/ads/wallets/{wallet['id']}/transactions", headers=other_seller_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Wallet belongs to another seller"


def test_missing_wallet_returns_404(client, seller, seller_headers):
    response = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == f"Wallet for seller not found: {seller.id}"


def test_deposit_is_admin_only(client, seller, seller_headers, admin_headers):
    wallet = open_wallet(client, seller, seller_headers).json()

    denied = client.post(f"/ads/wallets/{wallet['id']}/deposit", json={"amount": "10.00"}, headers=seller_headers)
    assert denied.status_code == 403

    response = client.post(
        f"/ads/wallets/{wallet['id']}/deposit",
        json={"amount": "10.00", "payment_method": "bank_transfer", "reference": "wire-42"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    record = response.json()
    assert record["type"] == "DEPOSIT"
    assert record["payment_method"] == "bank_transfer"
    assert record["reference"] == "wire-42"
    assert Decimal(record["balance_before"]) == Decimal("0")
    assert Decimal(record["balance_after"]) == Decimal("10.00")


def test_zero_deposit_is_rejected(client, seller, seller_headers, admin_headers):
    wallet = open_wallet(client, seller, seller_headers).json()
    response = client.post(f"/ads/wallets/{wallet['id']}/deposit", json={"amount": "0"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["errors"] == ["Transaction amount must be greater than 0"]


def test_deposit_into_other_tenant_wallet_is_not_found(client, db_session, seller, seller_headers):
    wallet = open_wallet(client, seller, seller_headers).json()
    outsider = make_user(db_session, "admin@tenant-b.com", role="admin", tenant_id="tenant-b")
    response = client.post(
        f"/ads/wallets/{wallet['id']}/deposit", json={"amount": "5.00"}, headers=bearer(outsider)
    )
    assert response.status_code == 404


def test_withdrawal_checks_balance(client, builder, seller, seller_headers):
    wallet = builder.fund(seller.id, "30.00")

    short = client.post(f"/ads/wallets/{wallet['id']}/withdraw", json={"amount": "45.00"}, headers=seller_headers)
    assert short.status_code == 400
    assert short.json()["errors"] == ["Insufficient balance for this transaction"]

    response = client.post(
        f"/ads/wallets/{wallet['id']}/withdraw",
        json={"amount": "12.50", "description": "Payout"},
        headers=seller_headers,
    )
    assert response.status_code == 201
    record = response.json()
    assert record["type"] == "WITHDRAWAL"
    assert record["description"] == "Payout"
    assert Decimal(record["balance_after"]) == Decimal("17.50")

    refreshed = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(refreshed["balance"]) == Decimal("17.50")
    assert Decimal(refreshed["total_spent"]) == Decimal("12.50")


def test_suspended_wallet_cannot_withdraw(client, builder, db_session, seller, seller_headers):
    wallet = builder.fund(seller.id, "30.00")
    row = db_session.get(SellerWallet, wallet["id"])
    row.is_suspended = True
    db_session.commit()

    response = client.post(f"/ads/wallets/{wallet['id']}/withdraw", json={"amount": "5.00"}, headers=seller_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Wallet is suspended"


def test_transaction_history_lists_every_movement(client, builder, seller, seller_headers, admin_headers):
    wallet = builder.fund(seller.id, "30.00")
    client.post(f"/ads/wallets/{wallet['id']}/deposit", json={"amount": "5.00"}, headers=admin_headers)
    client.post(f"/ads/wallets/{wallet['id']}/withdraw", json={"amount": "2.00"}, headers=seller_headers)

    transactions = client.get(f"/ads/wallets/{wallet['id']}/transactions", headers=seller_headers).json()
    assert sorted(t["type"] for t in transactions) == ["DEPOSIT", "DEPOSIT", "WITHDRAWAL"]
    assert sorted(Decimal(t["balance_after"]) for t in transactions) == [
        Decimal("30.00"),
        Decimal("33.00"),
        Decimal("35.00"),
    ]
