"""Integration tests for /api/v1/bank-accounts/."""

from __future__ import annotations

import pytest

from modules.accounts.models import BankAccount

pytestmark = pytest.mark.integration

URL = "/api/v1/bank-accounts/"

PAYLOAD = {
    "bank_name": "First Bank",
    "bank_account_name": "Sally Seller",
    "bank_account_number": "5555566666",
}


class TestBankAccountAPI:
    def test_create_and_list(self, seller_client, seller):
        created = seller_client.post(URL, PAYLOAD, format="json")
        assert created.status_code == 201
        assert BankAccount.objects.get(id=created.data["id"]).owner_id == seller.id

        listed = seller_client.get(URL)
        assert [a["id"] for a in listed.data] == [created.data["id"]]

    def test_list_only_own_accounts(self, buyer_client, bank_account):
        assert buyer_client.get(URL).data == []

    @pytest.mark.parametrize("field", list(PAYLOAD))
    def test_length_validation(self, seller_client, field):
        response = seller_client.post(URL, {**PAYLOAD, field: "abc"}, format="json")
        assert response.status_code == 400

    def test_owner_updates(self, seller_client, bank_account):
        response = seller_client.patch(
            f"{URL}{bank_account.id}/", {"bank_name": "Other Bank"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["bank_name"] == "Other Bank"

    def test_other_user_cannot_update(self, buyer_client, bank_account):
        response = buyer_client.patch(
            f"{URL}{bank_account.id}/", {"bank_name": "Other Bank"}, format="json"
        )
        assert response.status_code == 403

    def test_delete_is_soft(self, seller_client, bank_account):
        response = seller_client.delete(f"{URL}{bank_account.id}/")
        assert response.status_code == 204
        bank_account.refresh_from_db()
        assert bank_account.is_deleted

    def test_delete_missing(self, seller_client):
        assert seller_client.delete(f"{URL}999999/").status_code == 404
