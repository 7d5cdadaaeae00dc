"""Block aggregation: latest block, lookups, pagination and block transactions"""

import logging
from typing import Any, List, Optional

from explorer.errors import ExplorerError, invalid_input, is_not_found, not_found
from explorer.models.api import BlockPage, BlockTransactions, Pagination
from explorer.models.blockchain import Block, TransactionSummary
from explorer.services.amounts import sum_utxo_amounts
from explorer.services.datasource.blockfrost import BlockfrostClient
from explorer.services.fanout import gather_all, gather_settled
from explorer.services.validation import require_hash, require_height

logger = logging.getLogger(__name__)

MAX_BLOCK_TRANSACTIONS = 50
MAX_PAGE_SIZE = 100  # Blockfrost's largest page


class BlockAggregator:
    """Combines Blockfrost block endpoints into normalized block views"""

    def __init__(self, client: BlockfrostClient) -> None:
        self._client = client

    async def latest_block(self) -> Block:
        data = await self._client.fetch("/blocks/latest")
        return Block.model_validate(data)

    async def block_by_hash(self, block_hash: str) -> Block:
        require_hash(block_hash, "block")
        try:
            data = await self._client.fetch(f"/blocks/{block_hash}")
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Block not found", code="block_not_found") from exc
            raise
        return Block.model_validate(data)

    async def block_by_height(self, height: int) -> Block:
        """
        Look up a block by height.

        The tip is fetched first so a height beyond it fails with a range
        error rather than a not-found.
        """
        require_height(height)

        latest = await self.latest_block()
        if latest.height is not None and height > latest.height:
            raise invalid_input(
                f"Block height {height} is out of range (tip is {latest.height})",
                code="block_height_out_of_range",
            )
        try:
            data = await self._client.fetch(f"/blocks/{height}")
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Block not found at this height", code="block_not_found") from exc
            raise
        if not isinstance(data, dict) or not data.get("hash"):
            raise not_found("Block not found at this height", code="block_not_found")
        return Block.model_validate(data)

    async def blocks_page(self, page: int = 1, page_size: int = 10) -> BlockPage:
        """
        Latest block plus ``page_size`` preceding blocks.

        Pages are counted back from the current tip, so the same page number
        shifts as new blocks arrive.
        """
        if page < 1:
            raise invalid_input("Page must be at least 1", code="invalid_page")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise invalid_input(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}", code="invalid_page_size"
            )

        latest = await self.latest_block()
        previous = await self._client.fetch(
            f"/blocks/{latest.hash}/previous", params={"count": page_size, "page": page}
        )
        blocks = [latest] + [Block.model_validate(item) for item in previous or []]

        tip_height = latest.height or 0
        total_pages = -(-tip_height // page_size)
        return BlockPage(
            blocks=blocks,
            pagination=Pagination(
                current_page=page,
                page_size=page_size,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_previous=page > 1,
                total_blocks=tip_height,
            ),
        )

    async def block_transactions(self, block_hash: str) -> BlockTransactions:
        """
        Summaries for the first 50 transactions of a block.

        A transaction whose detail calls fail is logged and left out, so the
        result may hold fewer rows than the block's tx_count.
        """
        require_hash(block_hash, "block")

        try:
            block_data, tx_hashes = await gather_all(
                self._client.fetch(f"/blocks/{block_hash}"),
                self._client.fetch(f"/blocks/{block_hash}/txs", params={"order": "desc"}),
            )
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Block not found", code="block_not_found") from exc
            raise

        if not tx_hashes:
            return BlockTransactions(transactions=[])

        candidates = [_tx_hash_of(item) for item in tx_hashes[:MAX_BLOCK_TRANSACTIONS]]
        limited = [tx_hash for tx_hash in candidates if isinstance(tx_hash, str) and tx_hash]
        if len(limited) < len(candidates):
            logger.warning(
                "Block %s: skipping %d tx entries without a hash",
                block_hash[:16],
                len(candidates) - len(limited),
            )
        logger.debug("Block %s: summarizing %d of %d txs", block_hash[:16], len(limited), len(tx_hashes))

        settled = await gather_settled(
            *[self._summarize(tx_hash, block_hash, block_data.get("time")) for tx_hash in limited]
        )

        transactions: List[TransactionSummary] = []
        for tx_hash, outcome in zip(limited, settled):
            if isinstance(outcome, BaseException):
                log = logger.debug if is_not_found(outcome) else logger.warning
                log("Dropping tx %s from block %s: %s", tx_hash[:16], block_hash[:16], outcome)
                continue
            transactions.append(outcome)

        if len(transactions) < len(limited):
            logger.warning(
                "Block %s: %d/%d transactions summarized",
                block_hash[:16],
                len(transactions),
                len(limited),
            )
        return BlockTransactions(transactions=transactions)

    async def _summarize(self, tx_hash: str, block_hash: str, block_time: Any) -> TransactionSummary:
        tx_data, utxo_data = await gather_all(
            self._client.fetch(f"/txs/{tx_hash}"),
            self._client.fetch(f"/txs/{tx_hash}/utxos"),
        )
        inputs = utxo_data.get("inputs") or []
        outputs = utxo_data.get("outputs") or []
        return TransactionSummary(
            hash=tx_hash,
            block=block_hash,
            block_time=block_time,
            inputs=len(inputs),
            outputs=len(outputs),
            input_amount=sum_utxo_amounts(inputs),
            output_amount=sum_utxo_amounts(outputs),
            fees=tx_data.get("fees") or "0",
        )


def _tx_hash_of(item: Any) -> Optional[str]:
    # Older API versions return objects instead of bare hashes
    if isinstance(item, dict):
        return item.get("tx_hash") or item.get("hash")
    return item
