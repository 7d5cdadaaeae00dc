"""Transaction lookup API endpoints"""

import logging

from fastapi import APIRouter, Depends, Request

from explorer.services.explorer_service import ExplorerService
from explorer.api.deps import get_explorer_service
from explorer.api.responses import respond

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tx_hash}")
async def get_transaction(
    tx_hash: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Get transaction details

    Returns the transaction with resolved inputs/outputs, lovelace totals
    and native assets listed per output.

    Example: GET /api/tx/6f3c...e1a2
    """
    logger.debug("Transaction route hit: %s", tx_hash)
    return await respond(request, explorer.transactions.transaction_details(tx_hash))
