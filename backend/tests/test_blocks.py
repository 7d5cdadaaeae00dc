"""Tests for block aggregation"""

import pytest

from explorer.errors import ErrorKind, ExplorerError

from conftest import (
    BLOCK_HASH,
    OTHER_TX_HASH,
    PREVIOUS_HASH,
    TX_HASH,
    lovelace,
    make_block,
    make_tx,
    make_utxos,
)


class TestBlockLookups:
    """latest_block, block_by_hash and block_by_height"""

    @pytest.mark.asyncio
    async def test_latest_block(self, service, fake):
        fake.add("/blocks/latest", make_block())

        block = await service.blocks.latest_block()

        assert block.hash == BLOCK_HASH
        assert block.height == 10_000_000
        assert block.fees == "592661"

    @pytest.mark.asyncio
    async def test_numeric_fees_become_strings(self, service, fake):
        fake.add("/blocks/latest", make_block(fees=9007199254740993))

        block = await service.blocks.latest_block()

        assert block.fees == "9007199254740993"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_hash", ["", "abc", "zz" * 32, "ab" * 33])
    async def test_block_by_hash_rejects_bad_hash_without_network(self, service, fake, bad_hash):
        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_hash(bad_hash)

        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_block_by_hash_not_found(self, service):
        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_hash(BLOCK_HASH)

        assert exc_info.value.is_not_found
        assert exc_info.value.message == "Block not found"
        assert exc_info.value.code == "block_not_found"

    @pytest.mark.asyncio
    async def test_block_by_hash_propagates_other_failures(self, service, fake):
        fake.fail(f"/blocks/{BLOCK_HASH}", 500)

        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_hash(BLOCK_HASH)

        assert exc_info.value.kind is ErrorKind.UPSTREAM

    @pytest.mark.asyncio
    async def test_block_by_height(self, service, fake):
        fake.add("/blocks/latest", make_block(height=200))
        fake.add("/blocks/150", make_block(block_hash=PREVIOUS_HASH, height=150))

        block = await service.blocks.block_by_height(150)

        assert block.hash == PREVIOUS_HASH
        assert len(fake.calls("/blocks/latest")) == 1
        assert len(fake.calls("/blocks/150")) == 1

    @pytest.mark.asyncio
    async def test_block_by_height_above_tip_is_range_error(self, service, fake):
        fake.add("/blocks/latest", make_block(height=200))

        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_height(201)

        assert exc_info.value.code == "block_height_out_of_range"
        assert not exc_info.value.is_not_found
        assert fake.calls("/blocks/201") == []

    @pytest.mark.asyncio
    async def test_block_by_height_missing_is_not_found(self, service, fake):
        fake.add("/blocks/latest", make_block(height=200))

        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_height(5)

        assert exc_info.value.is_not_found
        assert exc_info.value.message == "Block not found at this height"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_height", [-1, True, "12"])
    async def test_block_by_height_rejects_invalid(self, service, fake, bad_height):
        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_by_height(bad_height)

        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert fake.requests == []


class TestBlocksPage:
    """Tip-anchored pagination"""

    @pytest.mark.asyncio
    async def test_latest_then_previous(self, service, fake):
        fake.add("/blocks/latest", make_block(height=95))
        fake.add(
            f"/blocks/{BLOCK_HASH}/previous",
            [make_block(block_hash=PREVIOUS_HASH, height=94), make_block(block_hash="ee" * 32, height=93)],
        )

        page = await service.blocks.blocks_page(page=1, page_size=10)

        assert [b.height for b in page.blocks] == [95, 94, 93]
        assert page.pagination.current_page == 1
        assert page.pagination.total_pages == 10
        assert page.pagination.has_next is True
        assert page.pagination.has_previous is False
        assert page.pagination.total_blocks == 95

        previous_call = fake.calls(f"/blocks/{BLOCK_HASH}/previous")[0]
        assert previous_call.url.params["count"] == "10"
        assert previous_call.url.params["page"] == "1"

    @pytest.mark.asyncio
    async def test_last_page(self, service, fake):
        fake.add("/blocks/latest", make_block(height=100))
        fake.add(f"/blocks/{BLOCK_HASH}/previous", [])

        page = await service.blocks.blocks_page(page=10, page_size=10)

        assert page.pagination.total_pages == 10
        assert page.pagination.has_next is False
        assert page.pagination.has_previous is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,size", [(0, 10), (1, 0), (1, 101)])
    async def test_rejects_bad_paging(self, service, fake, page, size):
        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.blocks_page(page=page, page_size=size)

        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert fake.requests == []


class TestBlockTransactions:
    """Per-transaction fan-out with partial-failure tolerance"""

    def _register_tx(self, fake, tx_hash):
        fake.add(f"/txs/{tx_hash}", make_tx(tx_hash=tx_hash))
        fake.add(f"/txs/{tx_hash}/utxos", make_utxos(tx_hash=tx_hash))

    @pytest.mark.asyncio
    async def test_summaries(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(time=1_700_000_123))
        fake.add(f"/blocks/{BLOCK_HASH}/txs", [TX_HASH])
        self._register_tx(fake, TX_HASH)

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert len(result.transactions) == 1
        summary = result.transactions[0]
        assert summary.hash == TX_HASH
        assert summary.block == BLOCK_HASH
        assert summary.block_time == 1_700_000_123
        assert summary.inputs == 2
        assert summary.outputs == 1
        assert summary.input_amount == "1500000"
        assert summary.output_amount == "1320000"
        assert summary.fees == "180000"
        assert fake.calls(f"/blocks/{BLOCK_HASH}/txs")[0].url.params["order"] == "desc"

    @pytest.mark.asyncio
    async def test_failed_transaction_is_dropped(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(tx_count=3))
        third = "34" * 32
        fake.add(f"/blocks/{BLOCK_HASH}/txs", [TX_HASH, OTHER_TX_HASH, third])
        self._register_tx(fake, TX_HASH)
        self._register_tx(fake, third)
        fake.add(f"/txs/{OTHER_TX_HASH}", make_tx(tx_hash=OTHER_TX_HASH))
        fake.fail(f"/txs/{OTHER_TX_HASH}/utxos", 500)

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert [t.hash for t in result.transactions] == [TX_HASH, third]

    @pytest.mark.asyncio
    async def test_entries_without_hash_are_skipped(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(tx_count=3))
        fake.add(
            f"/blocks/{BLOCK_HASH}/txs",
            [{"tx_hash": TX_HASH}, {"index": 1}, {"hash": OTHER_TX_HASH}],
        )
        self._register_tx(fake, TX_HASH)

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert [t.hash for t in result.transactions] == [TX_HASH]
        assert fake.calls("/txs/None") == []

    @pytest.mark.asyncio
    async def test_all_transactions_failing_still_succeeds(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(tx_count=2))
        fake.add(f"/blocks/{BLOCK_HASH}/txs", [TX_HASH, OTHER_TX_HASH])

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert result.transactions == []

    @pytest.mark.asyncio
    async def test_caps_at_fifty(self, service, fake):
        hashes = [f"{i:064x}" for i in range(60)]
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(tx_count=60))
        fake.add(f"/blocks/{BLOCK_HASH}/txs", hashes)
        for tx_hash in hashes:
            self._register_tx(fake, tx_hash)

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert len(result.transactions) == 50
        assert [t.hash for t in result.transactions] == hashes[:50]
        assert fake.calls(f"/txs/{hashes[55]}") == []

    @pytest.mark.asyncio
    async def test_empty_block(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block(tx_count=0))
        fake.add(f"/blocks/{BLOCK_HASH}/txs", [])

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert result.transactions == []

    @pytest.mark.asyncio
    async def test_unknown_block_is_not_found(self, service):
        with pytest.raises(ExplorerError) as exc_info:
            await service.blocks.block_transactions(BLOCK_HASH)

        assert exc_info.value.code == "block_not_found"

    @pytest.mark.asyncio
    async def test_native_assets_excluded_from_totals(self, service, fake):
        fake.add(f"/blocks/{BLOCK_HASH}", make_block())
        fake.add(f"/blocks/{BLOCK_HASH}/txs", [TX_HASH])
        fake.add(f"/txs/{TX_HASH}", make_tx())
        fake.add(
            f"/txs/{TX_HASH}/utxos",
            {
                "hash": TX_HASH,
                "inputs": [{"amount": [lovelace("9007199254740993"), {"unit": "tok", "quantity": "5"}]}],
                "outputs": [{"amount": [{"unit": "tok", "quantity": "5"}]}],
            },
        )

        result = await service.blocks.block_transactions(BLOCK_HASH)

        assert result.transactions[0].input_amount == "9007199254740993"
        assert result.transactions[0].output_amount == "0"
