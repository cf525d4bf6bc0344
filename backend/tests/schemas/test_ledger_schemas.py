"""Ledger and auth schemas — boundary validation and camelCase serialization."""

import pytest
from pydantic import ValidationError

from merchcoin.core.ledger_views import (
    AccountInfo, InventoryLine, ReceivedTransfer, SentTransfer,
)
from merchcoin.schemas.auth import AuthRequest
from merchcoin.schemas.ledger import InfoResponse, SendCoinRequest


def test_send_coin_accepts_camel_case_alias():
    request = SendCoinRequest.model_validate({"toUser": "bob", "amount": 5})
    assert request.to_user == "bob"
    assert request.amount == 5


def test_send_coin_accepts_field_name():
    assert SendCoinRequest(to_user="bob", amount=1).to_user == "bob"


@pytest.mark.parametrize("amount", [0, -1, "10", 1.5, None])
def test_send_coin_rejects_non_positive_or_non_int_amount(amount):
    with pytest.raises(ValidationError):
        SendCoinRequest.model_validate({"toUser": "bob", "amount": amount})


def test_send_coin_requires_recipient():
    with pytest.raises(ValidationError):
        SendCoinRequest.model_validate({"toUser": "", "amount": 5})


def test_auth_request_strips_username():
    assert AuthRequest(username="  alice ", password="pw").username == "alice"


def test_auth_request_rejects_blank_username():
    with pytest.raises(ValidationError):
        AuthRequest(username="   ", password="pw")


def test_info_response_uses_camel_case_and_empty_lists():
    dumped = InfoResponse.from_account_info(AccountInfo(balance=1000)).model_dump(
        by_alias=True,
    )
    assert dumped == {
        "coins": 1000,
        "inventory": [],
        "coinHistory": {"received": [], "sent": []},
    }


def test_info_response_maps_history_entries():
    info = AccountInfo(
        balance=870,
        inventory=[InventoryLine(item_name="cup", quantity=2)],
        received=[ReceivedTransfer(from_username="ann", amount=10)],
        sent=[SentTransfer(to_username="ben", amount=100)],
    )

    dumped = InfoResponse.from_account_info(info).model_dump(by_alias=True)

    assert dumped["inventory"] == [{"type": "cup", "quantity": 2}]
    assert dumped["coinHistory"]["received"] == [{"fromUser": "ann", "amount": 10}]
    assert dumped["coinHistory"]["sent"] == [{"toUser": "ben", "amount": 100}]
