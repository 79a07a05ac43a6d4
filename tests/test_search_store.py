#!/usr/bin/env python3
"""
Integration Test: Search Store

Tests complete storage cycle: Parse XML -> Save search -> List -> Page back.
Uses a temporary database that pytest removes afterwards.
"""

import sqlite3

import pytest

from litsearch.errors import StorageError
from litsearch.load.search_store import SearchStore
from litsearch.transform.xml_parser import parse_xml_batch


def test_search_store_integration(tmp_path, sample_xml):
    print("\n=== Testing Search Store ===\n")

    print("Step 1: Creating store...")
    db_path = tmp_path / "nested" / "history.db"
    store = SearchStore(db_path)
    assert db_path.exists()
    print("  ✓ Database created with schema")

    print("\nStep 2: Parsing fixture and saving search...")
    records = parse_xml_batch(sample_xml)
    search_id = store.save("pubmed", "CRISPR[Title]", total_count=120, records=records, failure_count=1)
    print(f"  ✓ Saved search #{search_id} with {len(records)} records")

    print("\nStep 3: Listing searches...")
    second_id = store.save("pmc", "organoids", total_count=2, records=records[:1])
    searches = store.list_searches()
    assert [search.search_id for search in searches] == [second_id, search_id]
    first = searches[1]
    assert first.database == "pubmed"
    assert first.total_count == 120
    assert first.result_count == 3
    assert first.failure_count == 1
    print(f"  ✓ {len(searches)} searches listed, newest first")

    print("\nStep 4: Paging results back...")
    page_one = store.get_page(search_id, page=1, per_page=2)
    assert page_one.total_pages == 2
    assert [record.pmid for record in page_one.records] == ["36656942", "35504917"]
    assert page_one.records[0] == records[0]

    page_two = store.get_page(search_id, page=2, per_page=2)
    assert [record.pmid for record in page_two.records] == ["38810186"]

    past_end = store.get_page(search_id, page=3, per_page=2)
    assert past_end.records == []
    print("  ✓ Pages round-trip records in order")

    print("\nStep 5: Verifying foreign keys...")
    conn = sqlite3.connect(str(db_path))
    orphaned = conn.execute("""
        SELECT COUNT(*) FROM search_results r
        LEFT JOIN searches s ON r.search_id = s.search_id
        WHERE s.search_id IS NULL
    """).fetchone()[0]
    conn.close()
    assert orphaned == 0
    print("  ✓ No orphaned results")


def test_unknown_search_id_returns_none(tmp_path):
    store = SearchStore(tmp_path / "history.db")

    assert store.get_page(42) is None
    assert store.get_page(10 ** 400) is None


def test_page_far_past_the_end_is_empty(tmp_path, sample_xml):
    store = SearchStore(tmp_path / "history.db")
    search_id = store.save("pubmed", "q", total_count=3, records=parse_xml_batch(sample_xml))

    page = store.get_page(search_id, page=10 ** 400, per_page=10)

    assert page.records == []
    assert page.total_pages == 1


def test_invalid_page_arguments(tmp_path):
    store = SearchStore(tmp_path / "history.db")

    with pytest.raises(ValueError):
        store.get_page(1, page=0)


def test_failed_save_rolls_back(tmp_path, sample_xml):
    db_path = tmp_path / "history.db"
    store = SearchStore(db_path)
    records = parse_xml_batch(sample_xml)

    conn = sqlite3.connect(str(db_path))
    conn.execute("DROP TABLE search_results")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        store.save("pubmed", "q", total_count=3, records=records)

    assert store.list_searches() == []
