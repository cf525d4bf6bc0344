"""ORM Models — SQLAlchemy declarative models for the ledger tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Account is the aggregate root; holdings and transfers reference accounts by id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from merchcoin.models.account import Account  # noqa: F401
from merchcoin.models.catalog_item import CatalogItem  # noqa: F401
from merchcoin.models.inventory_holding import InventoryHolding  # noqa: F401
from merchcoin.models.transfer_record import TransferRecord  # noqa: F401
