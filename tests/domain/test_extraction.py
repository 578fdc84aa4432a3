from __future__ import annotations

import asyncio

from stocksync.domain.deadline import RunDeadline
from stocksync.domain.errors import CatalogPageError
from stocksync.domain.extraction import CatalogExtractor, select_units, to_reconciliation_unit
from stocksync.domain.types import CatalogPage
from tests.support.fakes import FakeCatalog, make_page, make_raw_unit


def _extract(catalog: FakeCatalog, **kwargs: object) -> list[str]:
    extractor = CatalogExtractor(fetcher=catalog, **kwargs)  # type: ignore[arg-type]
    return [unit.sku for unit in asyncio.run(extractor.extract_all())]


def test_units_without_usable_sku_are_dropped() -> None:
    raw = [
        make_raw_unit("SLAB-1", variant="1"),
        make_raw_unit("", variant="2"),
        make_raw_unit("   ", variant="3"),
        make_raw_unit(None, variant="4"),
        make_raw_unit("  SLAB-5 \t", variant="5"),
    ]

    units = select_units(raw)

    assert [unit.sku for unit in units] == ["SLAB-1", "SLAB-5"]
    assert [unit.variant_id for unit in units] == [
        "gid://shopify/ProductVariant/1",
        "gid://shopify/ProductVariant/5",
    ]


def test_unit_without_inventory_item_is_kept_but_not_updatable() -> None:
    unit = to_reconciliation_unit(make_raw_unit("SLAB-1", inventory_item=None))

    assert unit is not None
    assert unit.inventory_item_id is None
    assert not unit.updatable


def test_blank_inventory_item_id_becomes_none() -> None:
    unit = to_reconciliation_unit(make_raw_unit("SLAB-1", inventory_item=""))

    assert unit is not None
    assert unit.inventory_item_id is None


def test_pagination_is_exhaustive_and_chains_cursors() -> None:
    catalog = FakeCatalog(
        [
            make_page([make_raw_unit("A", variant="1")], next_cursor="c1"),
            make_page([make_raw_unit("B", variant="2")], next_cursor="c2"),
            make_page([make_raw_unit("C", variant="3")]),
        ]
    )

    skus = _extract(catalog, page_size=25)

    assert skus == ["A", "B", "C"]
    assert catalog.calls == 3
    assert catalog.cursors == [None, "c1", "c2"]
    assert catalog.page_sizes == [25, 25, 25]


def test_one_product_can_yield_several_units() -> None:
    catalog = FakeCatalog(
        [
            make_page(
                [
                    make_raw_unit("A-S", product="7", variant="1"),
                    make_raw_unit("A-M", product="7", variant="2"),
                    make_raw_unit(None, product="7", variant="3"),
                ]
            )
        ]
    )

    assert _extract(catalog) == ["A-S", "A-M"]


def test_failed_second_page_returns_first_page_units() -> None:
    catalog = FakeCatalog(
        [
            make_page(
                [make_raw_unit("A", variant="1"), make_raw_unit("B", variant="2")],
                next_cursor="c1",
            ),
            CatalogPageError("connection reset"),
            make_page([make_raw_unit("C", variant="3")]),
        ]
    )

    skus = _extract(catalog)

    assert skus == ["A", "B"]
    assert catalog.calls == 2


def test_failed_first_page_returns_nothing() -> None:
    catalog = FakeCatalog([CatalogPageError("Product page response has no product listing")])

    assert _extract(catalog) == []


def test_repeated_cursor_stops_the_walk() -> None:
    catalog = FakeCatalog(
        [
            make_page([make_raw_unit("A", variant="1")], next_cursor="c1"),
            make_page([make_raw_unit("B", variant="2")], next_cursor="c1"),
            make_page([make_raw_unit("C", variant="3")]),
        ]
    )

    assert _extract(catalog) == ["A", "B"]
    assert catalog.calls == 2


def test_has_next_page_without_cursor_stops_the_walk() -> None:
    catalog = FakeCatalog(
        [
            CatalogPage(units=(make_raw_unit("A"),), has_next_page=True, end_cursor=None),
            make_page([make_raw_unit("B", variant="2")]),
        ]
    )

    assert _extract(catalog) == ["A"]
    assert catalog.calls == 1


def test_expired_deadline_stops_before_fetching() -> None:
    catalog = FakeCatalog([make_page([make_raw_unit("A")])])
    deadline = RunDeadline(expires_at=0.0, clock=lambda: 1.0)

    assert _extract(catalog, deadline=deadline) == []
    assert catalog.calls == 0


def test_iter_pages_restarts_from_the_first_page() -> None:
    pages = [
        make_page([make_raw_unit("A", variant="1")], next_cursor="c1"),
        make_page([make_raw_unit("B", variant="2")]),
    ]
    catalog = FakeCatalog(pages + pages)
    extractor = CatalogExtractor(fetcher=catalog)

    async def walk_twice() -> None:
        async for _ in extractor.iter_pages():
            pass
        async for _ in extractor.iter_pages():
            pass

    asyncio.run(walk_twice())

    assert catalog.cursors == [None, "c1", None, "c1"]


def test_deadline_during_walk_keeps_pages_and_is_recorded() -> None:
    now = [0.0]
    catalog = FakeCatalog(
        [
            make_page([make_raw_unit("A", variant="1")], next_cursor="c1"),
            make_page([make_raw_unit("B", variant="2")]),
        ]
    )
    extractor = CatalogExtractor(
        fetcher=catalog,
        deadline=RunDeadline(expires_at=5.0, clock=lambda: now[0]),
    )

    async def walk() -> list[CatalogPage]:
        pages: list[CatalogPage] = []
        async for page in extractor.iter_pages():
            pages.append(page)
            now[0] = 10.0
        return pages

    pages = asyncio.run(walk())

    assert len(pages) == 1
    assert catalog.calls == 1
    assert extractor.deadline_reached


def test_completed_walk_does_not_record_deadline() -> None:
    extractor = CatalogExtractor(fetcher=FakeCatalog([make_page([make_raw_unit("A")])]))

    asyncio.run(extractor.extract_all())

    assert not extractor.deadline_reached
