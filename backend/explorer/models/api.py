"""API request and response models"""

from enum import Enum
from typing import Any, List, Optional, Union
from pydantic import BaseModel, Field

from .blockchain import (
    Address,
    AddressUtxo,
    Block,
    Epoch,
    Pool,
    StakeAccount,
    Transaction,
    TransactionSummary,
)


class Pagination(BaseModel):
    """Pagination metadata for the block list"""

    current_page: int = Field(..., ge=1, description="Requested page")
    page_size: int = Field(..., ge=1, description="Blocks per page")
    total_pages: int = Field(..., ge=0, description="ceil(tip height / page size)")
    has_next: bool = Field(..., description="Whether a later page exists")
    has_previous: bool = Field(..., description="Whether an earlier page exists")
    total_blocks: int = Field(..., ge=0, description="Height of the chain tip")


class BlockPage(BaseModel):
    """Page of recent blocks anchored at the chain tip"""

    blocks: List[Block] = Field(..., description="Latest block followed by preceding blocks")
    pagination: Pagination


class BlockTransactions(BaseModel):
    """Transactions of a block (at most the first 50)"""

    transactions: List[TransactionSummary] = Field(default_factory=list)


class AddressUtxos(BaseModel):
    """UTXO listing for an address"""

    utxos: List[AddressUtxo] = Field(default_factory=list)


class SearchResultType(str, Enum):
    """Kinds of entity a search can resolve to"""

    BLOCK = "block"
    TRANSACTION = "transaction"
    ADDRESS = "address"
    STAKE_ADDRESS = "stake_address"
    POOL = "pool"
    EPOCH = "epoch"


class SearchResult(BaseModel):
    """Tagged search result; ``type`` names which entity ``result`` holds"""

    type: SearchResultType
    result: Union[Transaction, Block, Address, StakeAccount, Pool, Epoch]


# Envelopes


class SuccessResponse(BaseModel):
    """Successful API response"""

    success: bool = True
    data: Any


class ErrorResponse(BaseModel):
    """Failed API response"""

    success: bool = False
    error: str = Field(..., description="Human-readable message")
    status: int = Field(..., description="HTTP status code")
    code: str = Field(..., description="Machine-readable error code")
    stack: Optional[str] = Field(None, description="Traceback (development mode only)")
