# test_aggregator.py
import itertools
import pytest
from decimal import Decimal
from src.exceptions import AggregationTimeoutError, NotFoundError, ProviderUnavailableError
from src.explorer.aggregator import BlockRangeAggregator, page_window
from conftest import ALICE, BOB, TOKEN, FakeProvider, block_hash_for, make_transfer_log, tx_hash_for

class TestPageWindow:
    def test_first_pages_from_head(self):
        assert page_window(105, 0).block_numbers == tuple(range(105, 95, -1))
        assert page_window(105, 1).block_numbers == tuple(range(95, 85, -1))

    def test_numbers_strictly_decreasing(self):
        for page in range(12):
            numbers = page_window(105, page).block_numbers
            assert all(a > b for a, b in zip(numbers, numbers[1:]))

    def test_window_truncated_at_block_one(self):
        window = page_window(105, 10)
        assert window.block_numbers == (5, 4, 3, 2, 1)
        assert 0 not in window.block_numbers

    def test_never_below_block_one(self):
        for head in range(0, 30):
            for page in range(0, 6):
                assert all(n >= 1 for n in page_window(head, page).block_numbers)

    def test_fallback_window_near_genesis(self):
        # Starting below zero falls back to the first ten blocks
        window = page_window(5, 1)
        assert window.block_numbers == tuple(range(10, 0, -1))
        assert window.last_block == 0
        assert window.next_page == 1

    def test_next_page_stops_at_genesis(self):
        window = page_window(100, 9)
        assert window.block_numbers == tuple(range(10, 0, -1))
        assert window.next_page == 9
        assert page_window(100, 8).next_page == 9

    def test_prev_page_never_negative(self):
        assert page_window(105, 0).prev_page == 0
        assert page_window(105, 1).prev_page == 0
        assert page_window(105, 4).prev_page == 3

    def test_rejects_negative_page(self):
        with pytest.raises(ValueError):
            page_window(105, -1)

    def test_custom_page_size(self):
        assert page_window(20, 1, blocks_per_page=5).block_numbers == (15, 14, 13, 12, 11)

class TestBlockRangeAggregator:
    @pytest.fixture
    def aggregator(self, chain):
        return BlockRangeAggregator(chain)

    def test_build_first_page(self, aggregator):
        page = aggregator.build_page(0)

        assert page.head_number == 105
        assert [block.number for block in page.blocks] == list(range(105, 95, -1))
        assert page.next_page == 1
        assert page.prev_page == 0
        assert not page.partial

        newest = page.blocks[0]
        assert newest.hash == block_hash_for(105)
        assert newest.transactions == 1
        assert newest.last_transaction_hash == tx_hash_for(105, 0)
        assert newest.last_transaction_status == "SUCCESSFUL"
        assert newest.transaction_details[0].value_ether == Decimal(1)
        assert newest.token_transfers[0].normalized_amount == Decimal(105)

    def test_head_fetched_once(self, chain, aggregator):
        aggregator.build_page(2)
        assert chain.count("header_latest") == 1

    def test_decimals_memoized_per_page(self, chain, aggregator):
        aggregator.build_page(0)
        assert chain.count("call") == 1

        aggregator.build_page(1)
        assert chain.count("call") == 2

    def test_missing_block_is_skipped(self, chain, aggregator):
        del chain.blocks[100]
        chain.unavailable_blocks.add(98)

        page = aggregator.build_page(0)

        assert len(page.blocks) == 10
        assert page.partial
        skipped = {block.number: block.skipped_reason for block in page.blocks if block.skipped}
        assert set(skipped) == {100, 98}
        assert skipped[100].startswith("not found")
        assert skipped[98].startswith("node unavailable")
        assert [block.number for block in page.blocks] == list(range(105, 95, -1))

    def test_head_failure_fails_page(self):
        class DownProvider(FakeProvider):
            def header_latest(self):
                raise ProviderUnavailableError("connection refused")

        with pytest.raises(ProviderUnavailableError):
            BlockRangeAggregator(DownProvider()).build_page(0)

    def test_empty_block(self, provider):
        provider.head = 1
        provider.add_block(1)
        block = BlockRangeAggregator(provider).build_page(0).blocks[0]

        assert block.transactions == 0
        assert block.last_transaction_hash is None
        assert block.last_transaction_status is None
        assert block.hash == block_hash_for(1)

    def test_parallel_receipts_keep_order(self, provider):
        provider.head = 1
        provider.decimals[TOKEN] = 0
        provider.add_block(
            1,
            transactions=[{"nonce": n} for n in range(8)],
            logs_by_tx={n: [make_transfer_log(amount=n, log_index=n)] for n in range(8)},
        )
        block = BlockRangeAggregator(provider, receipt_workers=4).build_page(0).blocks[0]

        assert [tx.hash for tx in block.transaction_details] == [tx_hash_for(1, n) for n in range(8)]
        assert [t.raw_amount for t in block.token_transfers] == list(range(8))

    def test_contract_creation_marker(self, provider):
        created = "0x" + "ee" * 20
        provider.head = 1
        provider.add_block(1, transactions=[{"to": None, "contract_address": created, "input": b"\x60\x80"}])
        detail = BlockRangeAggregator(provider).build_page(0).blocks[0].transaction_details[0]

        assert detail.to_address == f"{created} [CONTRACT CREATION]"
        assert detail.data == "6080"

    def test_failed_transaction_status(self, provider):
        provider.head = 1
        provider.add_block(1, transactions=[{"status": 0}])
        block = BlockRangeAggregator(provider).build_page(0).blocks[0]
        assert block.last_transaction_status == "FAILED"
        assert block.transaction_details[0].status == "FAILED"

    def test_receipt_gas_used_in_details(self, provider):
        provider.head = 1
        provider.add_block(1, transactions=[{"gas": 90000, "gas_used": 51234}])
        detail = BlockRangeAggregator(provider).build_page(0).blocks[0].transaction_details[0]
        assert detail.gas == 90000
        assert detail.gas_used == 51234

    def test_page_timeout(self, chain):
        ticks = itertools.count(0, 10)
        aggregator = BlockRangeAggregator(chain, page_timeout=15, clock=lambda: next(ticks))
        with pytest.raises(AggregationTimeoutError):
            aggregator.build_page(0)

    def test_block_transactions_by_number_and_hash(self, aggregator):
        by_number = aggregator.block_transactions("42")
        by_hash = aggregator.block_transactions(block_hash_for(42))

        assert by_number == by_hash
        assert by_number.block_number == 42
        assert by_number.transactions[0].from_address == ALICE
        assert by_number.transactions[0].to_address == BOB
        assert by_number.token_transfers[0].normalized_amount == Decimal(42)

    def test_block_transactions_missing(self, aggregator):
        with pytest.raises(NotFoundError):
            aggregator.block_transactions("500")
        with pytest.raises(NotFoundError):
            aggregator.block_transactions("not-a-hash")

    def test_transaction(self, aggregator):
        page = aggregator.transaction(tx_hash_for(7, 0))

        assert page.block_number == 7
        assert page.status == "SUCCESSFUL"
        assert len(page.transactions) == 1
        assert page.token_transfers[0].raw_amount == 7 * 10 ** 18

    def test_block_detail(self, aggregator):
        detail = aggregator.block_detail(block_hash_for(3))

        assert detail.number == 3
        assert detail.parent_hash == block_hash_for(2)
        assert detail.transactions == 1
        assert detail.gas_limit == 30_000_000
