import pytest

from services.brand_mapping import BrandEquivalenceGraph, BrandGraphBuilder, BrandRelationship, build_brand_graph


def test_end_to_end_relationship_graph():
    graph = build_brand_graph([BrandRelationship("bayer", "aspirin; bayercare")])

    assert graph.to_dict() == {
        "bayer": ["aspirin", "bayercare"],
        "aspirin": ["bayer"],
        "bayercare": ["bayer"],
    }


def test_graph_is_symmetric():
    relationships = [
        BrandRelationship("Bayer", "Aspirin; BayerCare"),
        BrandRelationship("Heel", "Traumeel; Zeel"),
        BrandRelationship("Aspirin", "Rennie"),
    ]
    graph = build_brand_graph(relationships)

    for brand, related in graph.relations.items():
        for other in related:
            assert brand in graph.related(other)


def test_brands_are_lowercased_and_trimmed():
    graph = build_brand_graph([BrandRelationship("BAYER", "  Aspirin  ;BayerCare")])

    assert set(graph.relations) == {"bayer", "aspirin", "bayercare"}
    assert graph.related("Bayer") == ("aspirin", "bayercare")


def test_self_relationship_is_allowed():
    graph = build_brand_graph([BrandRelationship("Neox", "neox")])

    assert graph.to_dict() == {"neox": ["neox"]}


def test_repeated_edges_are_deduplicated():
    graph = build_brand_graph([
        BrandRelationship("bayer", "aspirin"),
        BrandRelationship("aspirin", "bayer"),
    ])

    assert graph.to_dict() == {"bayer": ["aspirin"], "aspirin": ["bayer"]}


def test_empty_tokens_are_dropped():
    graph = build_brand_graph([
        BrandRelationship("bayer", "aspirin;; ;"),
        BrandRelationship("  ", "rennie"),
    ])

    assert "" not in graph
    assert "rennie" not in graph
    assert graph.to_dict() == {"bayer": ["aspirin"], "aspirin": ["bayer"]}


def test_primary_without_related_brands_is_still_a_key():
    graph = build_brand_graph([BrandRelationship("solo", "")])

    assert "solo" in graph
    assert graph.related("solo") == ()


def test_candidates_are_flattened_once_without_duplicates():
    graph = build_brand_graph([
        BrandRelationship("bayer", "aspirin; bayercare"),
        BrandRelationship("rennie", "bayer"),
    ])

    assert graph.candidates == ("aspirin", "bayercare", "rennie", "bayer")
    assert len(graph.candidates) == len(set(graph.candidates))


def test_graph_is_read_only():
    graph = build_brand_graph([BrandRelationship("bayer", "aspirin")])

    with pytest.raises(TypeError):
        graph.relations["new"] = ("brand",)


def test_build_is_deterministic():
    relationships = [BrandRelationship("bayer", "aspirin; bayercare"), BrandRelationship("heel", "zeel")]

    assert build_brand_graph(relationships) == BrandGraphBuilder().build(relationships)


def test_empty_input_gives_empty_graph():
    graph = build_brand_graph([])

    assert len(graph) == 0
    assert graph.candidates == ()
    assert graph == BrandEquivalenceGraph()
