"""Transaction aggregation"""

import logging
from typing import Any, Dict, List

from explorer.errors import ExplorerError, not_found
from explorer.models.blockchain import Transaction, TransactionInput, TransactionOutput
from explorer.services.amounts import split_assets, sum_utxo_amounts, total_base_units
from explorer.services.datasource.blockfrost import BlockfrostClient
from explorer.services.fanout import gather_all
from explorer.services.validation import require_hash

logger = logging.getLogger(__name__)


class TransactionAggregator:
    """Builds a full transaction view from the tx, UTXO and block endpoints"""

    def __init__(self, client: BlockfrostClient) -> None:
        self._client = client

    async def transaction_details(self, tx_hash: str) -> Transaction:
        """
        Fetch a transaction with its resolved inputs/outputs and block time.

        A not-found from any upstream call becomes "Transaction not found".
        Other failures from the UTXO or block call propagate unchanged and
        take precedence over a not-found from the other one.
        """
        require_hash(tx_hash, "transaction")
        logger.info("Looking up transaction: %s", tx_hash)

        try:
            tx_data = await self._client.fetch(f"/txs/{tx_hash}")
            utxo_data, block_data = await gather_all(
                self._client.fetch(f"/txs/{tx_hash}/utxos"),
                self._client.fetch(f"/blocks/{tx_data['block']}"),
            )
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Transaction not found", code="transaction_not_found") from exc
            raise

        return parse_transaction(tx_hash, tx_data, utxo_data, block_data)


def parse_transaction(
    tx_hash: str,
    tx_data: Dict[str, Any],
    utxo_data: Dict[str, Any],
    block_data: Dict[str, Any],
) -> Transaction:
    """Reduce raw Blockfrost records to a ``Transaction``"""
    raw_inputs: List[Dict[str, Any]] = utxo_data.get("inputs") or []
    raw_outputs: List[Dict[str, Any]] = utxo_data.get("outputs") or []

    inputs = [
        TransactionInput(
            address=item.get("address", ""),
            amount=total_base_units(item.get("amount")),
            tx_hash=item["tx_hash"],
            output_index=item["output_index"],
            collateral=bool(item.get("collateral")),
        )
        for item in raw_inputs
    ]
    outputs = [
        TransactionOutput(
            address=item.get("address", ""),
            amount=total_base_units(item.get("amount")),
            output_index=item.get("output_index"),
            assets=split_assets(item.get("amount")),
        )
        for item in raw_outputs
    ]

    return Transaction(
        hash=tx_hash,
        block_hash=tx_data["block"],
        block_height=tx_data.get("block_height"),
        block_time=block_data.get("time", tx_data.get("block_time")),
        slot=tx_data.get("slot"),
        index=tx_data.get("index"),
        fees=tx_data.get("fees") or "0",
        deposit=tx_data.get("deposit") or "0",
        size=tx_data.get("size") or 0,
        invalid_before=tx_data.get("invalid_before"),
        invalid_hereafter=tx_data.get("invalid_hereafter"),
        input_count=len(inputs),
        output_count=len(outputs),
        input_amount=sum_utxo_amounts(raw_inputs),
        output_amount=sum_utxo_amounts(raw_outputs),
        inputs=inputs,
        outputs=outputs,
    )
