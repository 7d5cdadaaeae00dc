"""Services for the Cardano explorer backend"""

from .addresses import AddressAggregator
from .blocks import BlockAggregator
from .explorer_service import ExplorerService
from .search import SearchDispatcher
from .transactions import TransactionAggregator

__all__ = [
    "AddressAggregator",
    "BlockAggregator",
    "ExplorerService",
    "SearchDispatcher",
    "TransactionAggregator",
]
