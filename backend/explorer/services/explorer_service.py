"""Wiring of the Blockfrost client and the aggregators built on top of it"""

import logging
from typing import Optional

import httpx

from explorer.config import Settings
from explorer.services.addresses import AddressAggregator
from explorer.services.blocks import BlockAggregator
from explorer.services.datasource.blockfrost import BlockfrostClient
from explorer.services.search import SearchDispatcher
from explorer.services.transactions import TransactionAggregator

logger = logging.getLogger(__name__)


class ExplorerService:
    """
    Holds one Blockfrost client and the aggregators sharing it.

    Created once by the app factory and stored on ``app.state``; there is no
    module-level instance.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.client = BlockfrostClient(settings, transport=transport)
        self.blocks = BlockAggregator(self.client)
        self.transactions = TransactionAggregator(self.client)
        self.addresses = AddressAggregator(self.client)
        self.search = SearchDispatcher(self.client, self.blocks, self.transactions, self.addresses)

    async def close(self) -> None:
        """Close the upstream HTTP client"""
        await self.client.close()
        logger.info("Blockfrost client closed")
