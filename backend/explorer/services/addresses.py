"""Address aggregation"""

import logging
import re
from typing import Any, List

from explorer.errors import ExplorerError, invalid_input, not_found
from explorer.models.api import AddressUtxos
from explorer.models.blockchain import Address, AddressTransaction, AddressUtxo
from explorer.services.amounts import has_lovelace, split_assets, total_base_units
from explorer.services.datasource.blockfrost import BlockfrostClient
from explorer.services.fanout import gather_settled

logger = logging.getLogger(__name__)

MAX_ADDRESS_TRANSACTIONS = 20
MAX_ADDRESS_UTXOS = 100

_ADDRESS_CHARS = re.compile(r"[A-Za-z0-9_]+")


def _require_address(address: Any) -> str:
    if not isinstance(address, str) or not _ADDRESS_CHARS.fullmatch(address):
        raise invalid_input("Invalid address", code="invalid_address")
    return address


def _parse_utxo(item: dict) -> AddressUtxo:
    return AddressUtxo(
        tx_hash=item["tx_hash"],
        output_index=item["output_index"],
        amount=total_base_units(item.get("amount")),
        assets=split_assets(item.get("amount")),
        block=item.get("block"),
    )


class AddressAggregator:
    """
    Combines the address summary, UTXO set and recent history.

    The summary is required. UTXO and history failures degrade to empty
    lists.
    """

    def __init__(self, client: BlockfrostClient) -> None:
        self._client = client

    async def address_details(self, address: str) -> Address:
        _require_address(address)
        logger.info("Looking up address: %s", address)

        summary, utxos, history = await gather_settled(
            self._client.fetch(f"/addresses/{address}"),
            self._client.fetch(f"/addresses/{address}/utxos", params={"count": MAX_ADDRESS_UTXOS}),
            self._client.fetch(
                f"/addresses/{address}/transactions",
                params={"order": "desc", "count": MAX_ADDRESS_TRANSACTIONS},
            ),
        )

        if isinstance(summary, BaseException):
            if isinstance(summary, ExplorerError) and summary.is_not_found:
                raise not_found("Address not found", code="address_not_found") from summary
            raise summary

        return Address(
            address=address,
            balance=total_base_units(summary.get("amount")),
            assets=split_assets(summary.get("amount")),
            stake_address=summary.get("stake_address"),
            type=summary.get("type"),
            script=bool(summary.get("script")),
            utxos=self._utxos_or_empty(address, utxos),
            transactions=self._history_or_empty(address, history),
        )

    async def address_utxos(self, address: str) -> AddressUtxos:
        """UTXOs of an address, keeping only those that carry lovelace"""
        _require_address(address)
        try:
            items = await self._client.fetch(
                f"/addresses/{address}/utxos", params={"count": MAX_ADDRESS_UTXOS}
            )
        except ExplorerError as exc:
            if exc.is_not_found:
                raise not_found("Address not found", code="address_not_found") from exc
            raise
        return AddressUtxos(
            utxos=[_parse_utxo(item) for item in items or [] if has_lovelace(item.get("amount"))]
        )

    def _utxos_or_empty(self, address: str, outcome: Any) -> List[AddressUtxo]:
        if isinstance(outcome, BaseException):
            # Blockfrost answers 404 for addresses that hold no UTXOs
            log = logger.debug if isinstance(outcome, ExplorerError) and outcome.is_not_found else logger.warning
            log("UTXO fetch failed for %s, returning none: %s", address[:16], outcome)
            return []
        return [_parse_utxo(item) for item in (outcome or [])[:MAX_ADDRESS_UTXOS]]

    def _history_or_empty(self, address: str, outcome: Any) -> List[AddressTransaction]:
        if isinstance(outcome, BaseException):
            logger.warning("History fetch failed for %s, returning none: %s", address[:16], outcome)
            return []
        return [
            AddressTransaction(
                tx_hash=item["tx_hash"],
                tx_index=item.get("tx_index"),
                block_height=item.get("block_height"),
                block_time=item.get("block_time"),
            )
            for item in (outcome or [])[:MAX_ADDRESS_TRANSACTIONS]
        ]
