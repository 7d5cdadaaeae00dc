"""
Search dispatch.

A query is classified by its shape, then resolved with the lookups for that
kind. The patterns are mutually exclusive, so a query never falls through to
a second kind once one matches.
"""

import logging
import re
from typing import Any, Dict

from explorer.errors import ExplorerError, invalid_input, is_not_found, not_found
from explorer.models.api import SearchResult, SearchResultType
from explorer.models.blockchain import Block, Epoch, Pool, PoolMetadata, StakeAccount
from explorer.services.addresses import AddressAggregator
from explorer.services.blocks import BlockAggregator
from explorer.services.datasource.blockfrost import BlockfrostClient
from explorer.services.fanout import gather_all, gather_settled
from explorer.services.transactions import TransactionAggregator
from explorer.services.validation import is_oversized_height

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_STAKE_REWARDS = 10

SEARCH_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "height": re.compile(r"[0-9]+"),
    "hash": re.compile(r"[0-9a-fA-F]{64}"),
    "address": re.compile(r"(?:addr1|addr_test1)[a-zA-Z0-9]+|(?:Ae2|DdzFF)[1-9A-HJ-NP-Za-km-z]+"),
    "stake": re.compile(r"(?:stake1|stake_test1)[a-zA-Z0-9]+"),
    "pool": re.compile(r"pool1[a-zA-Z0-9]+"),
    "epoch": re.compile(r"epoch[\s:#]*([0-9]+)", re.IGNORECASE),
}


class SearchDispatcher:
    """Routes a free-text query to the matching lookup"""

    def __init__(
        self,
        client: BlockfrostClient,
        blocks: BlockAggregator,
        transactions: TransactionAggregator,
        addresses: AddressAggregator,
    ) -> None:
        self._client = client
        self._blocks = blocks
        self._transactions = transactions
        self._addresses = addresses

    async def search(self, query: str) -> SearchResult:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise invalid_input("Search query too short", code="query_too_short")

        logger.info("Search: %s", query)

        # Thousands separators are only meaningful for heights
        height_query = query.replace(",", "")
        if SEARCH_PATTERNS["height"].fullmatch(height_query):
            if is_oversized_height(height_query):
                raise not_found("Block not found", code="block_not_found")
            return await self._search_height(int(height_query))

        if SEARCH_PATTERNS["hash"].fullmatch(query):
            return await self._search_hash(query)

        if SEARCH_PATTERNS["address"].fullmatch(query):
            address = await self._addresses.address_details(query)
            return SearchResult(type=SearchResultType.ADDRESS, result=address)

        if SEARCH_PATTERNS["stake"].fullmatch(query):
            return await self._search_stake(query)

        if SEARCH_PATTERNS["pool"].fullmatch(query):
            return await self._search_pool(query)

        epoch_match = SEARCH_PATTERNS["epoch"].fullmatch(query)
        if epoch_match:
            if is_oversized_height(epoch_match.group(1)):
                raise not_found("Epoch not found", code="epoch_not_found")
            return await self._search_epoch(int(epoch_match.group(1)))

        raise invalid_input("Invalid search format", code="invalid_search_format")

    async def _search_height(self, height: int) -> SearchResult:
        data = await self._fetch_or_not_found(f"/blocks/{height}", "Block not found", "block_not_found")
        return SearchResult(type=SearchResultType.BLOCK, result=Block.model_validate(data))

    async def _search_hash(self, value: str) -> SearchResult:
        """A 64-hex query may be either a block or a transaction; the transaction wins"""
        block, transaction = await gather_settled(
            self._blocks.block_by_hash(value),
            self._transactions.transaction_details(value),
        )

        if not isinstance(transaction, BaseException):
            return SearchResult(type=SearchResultType.TRANSACTION, result=transaction)
        if not isinstance(block, BaseException):
            return SearchResult(type=SearchResultType.BLOCK, result=block)

        for error in (transaction, block):
            if not is_not_found(error):
                raise error
        raise not_found("No block or transaction found with this hash", code="hash_not_found")

    async def _search_stake(self, stake_address: str) -> SearchResult:
        try:
            account, rewards = await gather_all(
                self._client.fetch(f"/accounts/{stake_address}"),
                self._client.fetch(f"/accounts/{stake_address}/rewards"),
            )
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Stake address not found", code="stake_address_not_found") from exc
            raise

        result = StakeAccount.model_validate({**account, "rewards": (rewards or [])[:MAX_STAKE_REWARDS]})
        return SearchResult(type=SearchResultType.STAKE_ADDRESS, result=result)

    async def _search_pool(self, pool_id: str) -> SearchResult:
        pool, metadata = await gather_settled(
            self._client.fetch(f"/pools/{pool_id}"),
            self._client.fetch(f"/pools/{pool_id}/metadata"),
        )
        if isinstance(pool, BaseException):
            if is_not_found(pool):
                raise not_found("Pool not found", code="pool_not_found") from pool
            raise pool
        if isinstance(metadata, BaseException):
            if not is_not_found(metadata):
                raise metadata
            metadata = None

        result = Pool.model_validate(pool)
        if metadata:
            result.metadata = PoolMetadata.model_validate(metadata)
        return SearchResult(type=SearchResultType.POOL, result=result)

    async def _search_epoch(self, number: int) -> SearchResult:
        data = await self._fetch_or_not_found(f"/epochs/{number}", "Epoch not found", "epoch_not_found")
        return SearchResult(type=SearchResultType.EPOCH, result=Epoch.model_validate(data))

    async def _fetch_or_not_found(self, endpoint: str, message: str, code: str) -> Any:
        try:
            return await self._client.fetch(endpoint)
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found(message, code=code) from exc
            raise
