"""Block, transaction, address and search endpoints under /api/blocks"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from explorer.errors import invalid_input
from explorer.services.explorer_service import ExplorerService
from explorer.services.validation import is_oversized_height
from explorer.api.deps import get_explorer_service
from explorer.api.responses import respond

logger = logging.getLogger(__name__)

router = APIRouter()


# Static paths are registered before the catch-all /{hash_or_height}


@router.get("/search")
async def search(
    request: Request,
    q: Optional[str] = Query(default=None, description="Height, hash, address, stake address, pool id or 'epoch N'"),
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Search for a block, transaction, address, stake address, pool or epoch

    Example: GET /api/blocks/search?q=10234567
    """
    if not q:
        raise invalid_input("Search query is required", code="query_required")
    return await respond(request, explorer.search.search(q))


@router.get("/latest")
async def get_latest_block(
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """Newest block on the chain"""
    return await respond(request, explorer.blocks.latest_block())


@router.get("/address/{address}")
async def get_address(
    address: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Address balance, UTXOs and the 20 most recent transactions

    UTXO or history lookups that fail upstream come back as empty lists.
    """
    return await respond(request, explorer.addresses.address_details(address))


@router.get("/address/{address}/utxos")
async def get_address_utxos(
    address: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    return await respond(request, explorer.addresses.address_utxos(address))


@router.get("/tx/{tx_hash}")
async def get_transaction(
    tx_hash: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    return await respond(request, explorer.transactions.transaction_details(tx_hash))


@router.get("/{block_hash}/transactions")
async def get_block_transactions(
    block_hash: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """First 50 transactions of a block; ones that fail to load are omitted"""
    return await respond(request, explorer.blocks.block_transactions(block_hash))


@router.get("")
async def list_blocks(
    request: Request,
    page: int = Query(default=1, description="Page number counted back from the tip"),
    limit: int = Query(default=10, description="Blocks per page"),
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """
    Latest block followed by `limit` preceding blocks

    Example: GET /api/blocks?page=2&limit=20
    """
    return await respond(request, explorer.blocks.blocks_page(page, limit))


@router.get("/{hash_or_height}")
async def get_block(
    hash_or_height: str,
    request: Request,
    explorer: ExplorerService = Depends(get_explorer_service),
):
    """Block by 64-hex hash or by decimal height"""
    if hash_or_height.isascii() and hash_or_height.isdigit():
        if is_oversized_height(hash_or_height):
            raise invalid_input(
                "Block height is out of range",
                code="block_height_out_of_range",
            )
        return await respond(request, explorer.blocks.block_by_height(int(hash_or_height)))
    return await respond(request, explorer.blocks.block_by_hash(hash_or_height))
