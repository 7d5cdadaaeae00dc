"""Shared fixtures: a fake Blockfrost served through httpx.MockTransport"""

from typing import Any, Dict, List, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from explorer.config import Settings
from explorer.main import create_app
from explorer.services.explorer_service import ExplorerService

API_ROOT = "https://blockfrost.test/api/v0"
API_PREFIX = "/api/v0"

BLOCK_HASH = "ab" * 32
PREVIOUS_HASH = "cd" * 32
TX_HASH = "ef" * 32
OTHER_TX_HASH = "12" * 32
ADDRESS = "addr1qx2fxv2umyhttkxyxp8x0dlpdt3k6cwng5pxj3jhsydzer3n0d3vllmyqwsx5wktcd8cc3sq835lu7drv2xwl2wywfgse35a3x"
STAKE_ADDRESS = "stake1u9ylzsgxaa6xctf4juup682ar3juj85n8tx3hthnljg47zctvm3rc"
POOL_ID = "pool1pu5jlj4q9w9jlxeu370a3c9myx47md5j5m2str0naunn2q3lkdy"

NOT_FOUND_BODY = {
    "status_code": 404,
    "error": "Not Found",
    "message": "The requested component has not been found.",
}

RouteValue = Union[Tuple[int, Any], Exception]


class FakeBlockfrost:
    """
    In-memory stand-in for the Blockfrost API.

    Routes are keyed by path relative to the API root (query string ignored);
    unknown paths answer 404 like the real service.
    """

    def __init__(self) -> None:
        self.routes: Dict[str, RouteValue] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, body: Any, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def fail(self, path: str, status: int, message: str = "upstream failure") -> None:
        self.routes[path] = (status, {"status_code": status, "error": "Error", "message": message})

    def raise_on(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len(API_PREFIX):]
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == API_PREFIX + path]


def make_block(
    block_hash: str = BLOCK_HASH,
    height: int = 10_000_000,
    time: int = 1_700_000_000,
    tx_count: int = 2,
    **extra: Any,
) -> Dict[str, Any]:
    block = {
        "time": time,
        "height": height,
        "hash": block_hash,
        "slot": 110_000_000,
        "epoch": 450,
        "epoch_slot": 12_345,
        "slot_leader": POOL_ID,
        "size": 4_096,
        "tx_count": tx_count,
        "output": "128314491794",
        "fees": "592661",
        "block_vrf": "vrf_vk1wf2k6lhujezqcfe00l6zetxpnmh9n6mwhpmhm0dvfh3fxgmdnrfqkms8ty",
        "previous_block": PREVIOUS_HASH,
        "next_block": None,
        "confirmations": 0,
    }
    block.update(extra)
    return block


def lovelace(quantity: Union[str, int]) -> Dict[str, str]:
    return {"unit": "lovelace", "quantity": str(quantity)}


def make_tx(tx_hash: str = TX_HASH, block_hash: str = BLOCK_HASH, **extra: Any) -> Dict[str, Any]:
    tx = {
        "hash": tx_hash,
        "block": block_hash,
        "block_height": 10_000_000,
        "block_time": 1_700_000_000,
        "slot": 110_000_000,
        "index": 1,
        "output_amount": [lovelace("1320000")],
        "fees": "180000",
        "deposit": "0",
        "size": 433,
        "invalid_before": None,
        "invalid_hereafter": "110007200",
        "utxo_count": 3,
    }
    tx.update(extra)
    return tx


def make_utxos(tx_hash: str = TX_HASH) -> Dict[str, Any]:
    return {
        "hash": tx_hash,
        "inputs": [
            {
                "address": ADDRESS,
                "amount": [lovelace("1000000")],
                "tx_hash": OTHER_TX_HASH,
                "output_index": 0,
                "collateral": False,
            },
            {
                "address": ADDRESS,
                "amount": [lovelace("500000"), {"unit": "customtoken", "quantity": "7"}],
                "tx_hash": OTHER_TX_HASH,
                "output_index": 1,
                "collateral": False,
            },
        ],
        "outputs": [
            {
                "address": ADDRESS,
                "amount": [lovelace("1320000"), {"unit": "customtoken", "quantity": "7"}],
                "output_index": 0,
            },
        ],
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        blockfrost_api_key="test-project-id",
        blockfrost_base_url=API_ROOT,
        environment="test",
    )


@pytest.fixture
def fake() -> FakeBlockfrost:
    return FakeBlockfrost()


@pytest.fixture
def service(settings: Settings, fake: FakeBlockfrost) -> ExplorerService:
    return ExplorerService(settings, transport=fake.transport)


@pytest.fixture
def api_client(settings: Settings, fake: FakeBlockfrost):
    app = create_app(settings, transport=fake.transport)
    with TestClient(app) as client:
        yield client
