import json

import pytest

from services.brand_mapping import BrandRelationship
from services.datasets import (
    DatasetFormatError,
    DatasetNotFoundError,
    clear_brand_graph_cache,
    load_brand_graph,
    load_brand_relationships,
    load_pharmacy_items,
)


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_brand_graph_cache()
    yield
    clear_brand_graph_cache()


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_brand_relationships(tmp_path):
    path = _write(tmp_path / "connections.json", [
        {"manufacturer_p1": "Bayer", "manufacturers_p2": "Aspirin; BayerCare", "country": "ee"},
    ])

    assert load_brand_relationships(path) == [BrandRelationship("Bayer", "Aspirin; BayerCare")]


def test_missing_connections_file_raises(tmp_path):
    with pytest.raises(DatasetNotFoundError):
        load_brand_relationships(tmp_path / "missing.json")


def test_invalid_json_raises_format_error(tmp_path):
    path = tmp_path / "connections.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DatasetFormatError):
        load_brand_relationships(path)


def test_invalid_rows_raise_format_error(tmp_path):
    path = _write(tmp_path / "connections.json", [{"manufacturers_p2": "aspirin"}])

    with pytest.raises(DatasetFormatError):
        load_brand_relationships(path)


def test_load_brand_graph_is_cached_per_path(tmp_path):
    path = _write(tmp_path / "connections.json", [
        {"manufacturer_p1": "bayer", "manufacturers_p2": "aspirin"},
    ])

    first = load_brand_graph(path)
    _write(path, [{"manufacturer_p1": "heel", "manufacturers_p2": "zeel"}])

    assert load_brand_graph(path) is first

    clear_brand_graph_cache()
    assert "heel" in load_brand_graph(path)


def test_load_pharmacy_items_coerces_ids(tmp_path):
    path = _write(tmp_path / "items.json", [
        {"title": "Bayer Aspirin", "source_id": 1001},
        {"title": "Traumeel S", "source_id": "1002", "m_id": "abc", "price": 4.5},
    ])

    items = load_pharmacy_items(path)

    assert [item.source_id for item in items] == ["1001", "1002"]
    assert items[0].m_id is None
    assert items[1].m_id == "abc"


def test_optional_missing_items_file_gives_empty_list(tmp_path):
    assert load_pharmacy_items(tmp_path / "missing.json", must_exist=False) == []


def test_required_missing_items_file_raises(tmp_path):
    with pytest.raises(DatasetNotFoundError):
        load_pharmacy_items(tmp_path / "missing.json")


def test_items_without_title_raise_format_error(tmp_path):
    path = _write(tmp_path / "items.json", [{"source_id": "1"}])

    with pytest.raises(DatasetFormatError):
        load_pharmacy_items(path)
