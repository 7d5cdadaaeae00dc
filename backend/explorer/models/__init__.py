"""Data models for the Cardano explorer"""

from .blockchain import (
    Address,
    AddressTransaction,
    AddressUtxo,
    Asset,
    Block,
    Epoch,
    Pool,
    PoolMetadata,
    Reward,
    StakeAccount,
    Transaction,
    TransactionInput,
    TransactionOutput,
    TransactionSummary,
)
from .api import (
    AddressUtxos,
    BlockPage,
    BlockTransactions,
    ErrorResponse,
    Pagination,
    SearchResult,
    SearchResultType,
    SuccessResponse,
)

__all__ = [
    "Address",
    "AddressTransaction",
    "AddressUtxo",
    "Asset",
    "Block",
    "Epoch",
    "Pool",
    "PoolMetadata",
    "Reward",
    "StakeAccount",
    "Transaction",
    "TransactionInput",
    "TransactionOutput",
    "TransactionSummary",
    "AddressUtxos",
    "BlockPage",
    "BlockTransactions",
    "ErrorResponse",
    "Pagination",
    "SearchResult",
    "SearchResultType",
    "SuccessResponse",
]
