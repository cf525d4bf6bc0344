"""Ledger Schemas — wire shapes for info, sendCoin and buy.

Invariants:
    - SendCoinRequest.amount is a strict positive integer (no floats, no numeric strings)
    - InfoResponse serializes camelCase keys (coinHistory, fromUser, toUser)
    - Collections default to empty lists, never null
"""

from pydantic import BaseModel, ConfigDict, Field

from merchcoin.core.ledger_views import AccountInfo


class SendCoinRequest(BaseModel):
    """Coin transfer request body."""
    model_config = ConfigDict(populate_by_name=True)

    to_user: str = Field(alias="toUser", min_length=1, max_length=64)
    amount: int = Field(gt=0, strict=True)


class StatusResponse(BaseModel):
    status: str


class InventoryItemResponse(BaseModel):
    type: str
    quantity: int


class ReceivedTransferResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_user: str = Field(serialization_alias="fromUser")
    amount: int


class SentTransferResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to_user: str = Field(serialization_alias="toUser")
    amount: int


class CoinHistoryResponse(BaseModel):
    received: list[ReceivedTransferResponse] = Field(default_factory=list)
    sent: list[SentTransferResponse] = Field(default_factory=list)


class InfoResponse(BaseModel):
    """GET /api/info payload."""
    coins: int
    inventory: list[InventoryItemResponse] = Field(default_factory=list)
    coin_history: CoinHistoryResponse = Field(
        default_factory=CoinHistoryResponse, serialization_alias="coinHistory",
    )

    @classmethod
    def from_account_info(cls, info: AccountInfo) -> "InfoResponse":
        return cls(
            coins=info.balance,
            inventory=[
                InventoryItemResponse(type=line.item_name, quantity=line.quantity)
                for line in info.inventory
            ],
            coin_history=CoinHistoryResponse(
                received=[
                    ReceivedTransferResponse(from_user=t.from_username, amount=t.amount)
                    for t in info.received
                ],
                sent=[
                    SentTransferResponse(to_user=t.to_username, amount=t.amount)
                    for t in info.sent
                ],
            ),
        )
