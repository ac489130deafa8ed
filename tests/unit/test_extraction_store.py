"""Unit tests for the append-only extraction store."""

from __future__ import annotations

import threading

import pytest

from product_pulse.core.exceptions import RecordValidationError
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.core.schemas.records import ScrapedProduct, ScrapedReview, utc_now

_SRC_A = "https://a.example.com/list"
_SRC_B = "https://b.example.com/list"


def _review(product_id: str, rating: int = 5, source: str = _SRC_A) -> ScrapedReview:
    return ScrapedReview(
        product_id=product_id,
        source=source,
        rating=rating,
        comment="fine",
        timestamp=utc_now(),
    )


def _product(name: str, source: str = _SRC_A) -> ScrapedProduct:
    return ScrapedProduct(name=name, price="", description="", source=source, timestamp=utc_now())


class TestAppend:
    def test_empty_batch_is_a_no_op(self) -> None:
        store = ExtractionStore()
        assert store.append([]) == 0
        assert len(store) == 0

    def test_mixed_batch_split_by_type(self) -> None:
        store = ExtractionStore()
        assert store.append([_review("p1"), _product("Rouge"), _review("p1")]) == 3
        assert store.review_count == 2
        assert store.product_count == 1
        assert len(store) == 3

    def test_foreign_object_rejects_whole_batch(self) -> None:
        store = ExtractionStore()
        batch = [_product("Rouge"), {"name": "not a record"}]

        with pytest.raises(RecordValidationError, match="dict"):
            store.append(batch)  # type: ignore[list-item]

        assert len(store) == 0

    def test_duplicates_are_kept(self) -> None:
        store = ExtractionStore()
        record = _product("Rouge")
        store.append([record])
        store.append([record])
        assert store.query_by_source(_SRC_A) == [record, record]


class TestQueries:
    def test_query_by_source_filters_and_keeps_order(self) -> None:
        store = ExtractionStore()
        first, other, second = _product("One"), _product("Other", _SRC_B), _product("Two")
        store.append([first, other])
        store.append([second])

        assert store.query_by_source(_SRC_A) == [first, second]
        assert store.query_by_source(_SRC_B) == [other]
        assert store.query_by_source("https://nowhere.test/") == []

    def test_query_by_product_filters_and_keeps_order(self) -> None:
        store = ExtractionStore()
        r1, r2, r3 = _review("p1", 5), _review("p2", 1), _review("p1", 3, _SRC_B)
        store.append([r1, r2, r3])

        assert store.query_by_product("p1") == [r1, r3]
        assert store.query_by_product("p2") == [r2]
        assert store.query_by_product("p3") == []

    def test_queries_return_copies(self) -> None:
        store = ExtractionStore()
        store.append([_product("Rouge")])
        store.query_by_source(_SRC_A).clear()
        assert store.product_count == 1


class TestConcurrency:
    def test_concurrent_batches_stay_contiguous(self) -> None:
        store = ExtractionStore()
        batch_size = 50
        sources = [f"https://shop{i}.test/" for i in range(8)]
        barrier = threading.Barrier(len(sources))

        def worker(source: str) -> None:
            batch = [_product(f"item-{n}", source) for n in range(batch_size)]
            barrier.wait()
            store.append(batch)

        threads = [threading.Thread(target=worker, args=(s,)) for s in sources]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.product_count == batch_size * len(sources)
        for source in sources:
            names = [p.name for p in store.query_by_source(source)]
            assert names == [f"item-{n}" for n in range(batch_size)]

        # Each batch occupies one contiguous run of the shared list.
        all_sources = [p.source for p in store._products]
        runs = [s for i, s in enumerate(all_sources) if i == 0 or all_sources[i - 1] != s]
        assert sorted(runs) == sorted(sources)
