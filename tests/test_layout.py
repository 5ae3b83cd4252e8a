"""Tests for layout.py - topological ordering, ranking and row packing."""

import logging

import pytest

from conftest import make_graph
from graphscene.layout import assign_ranks, layout_graph, topological_order
from graphscene.models import Edge, Graph, Node
from graphscene.scene import node_box


def _coords(graph: Graph) -> dict[str, tuple[float, float]]:
    return {n.id: (n.x, n.y) for n in graph.nodes}


def _longest_path_ranks(graph: Graph) -> dict[str, int]:
    """Reference ranks: longest path from any source, by memoised recursion."""
    parents: dict[str, list[str]] = {n.id: [] for n in graph.nodes}
    for edge in graph.valid_edges():
        parents[edge.target].append(edge.source)

    memo: dict[str, int] = {}

    def depth(node_id: str) -> int:
        if node_id not in memo:
            memo[node_id] = max((depth(p) + 1 for p in parents[node_id]), default=0)
        return memo[node_id]

    return {nid: depth(nid) for nid in parents}


# ─── Topological order ───────────────────────────────────────────────────────


def test_topological_order_breaks_ties_by_input_order():
    graph = make_graph(["C", "A", "B", "D"], ("A", "D"), ("C", "D"))
    order, complete = topological_order(graph.nodes, graph.edges)
    assert complete
    assert order == ["C", "A", "B", "D"]


def test_topological_order_reports_cycle():
    graph = make_graph(["A", "B"], ("A", "B"), ("B", "A"))
    order, complete = topological_order(graph.nodes, graph.edges)
    assert not complete
    assert order == []


def test_topological_order_ignores_dangling_edges():
    graph = make_graph(["A", "B"], ("ghost", "A"), ("A", "B"))
    order, complete = topological_order(graph.nodes, graph.edges)
    assert complete
    assert order == ["A", "B"]


# ─── Ranking ─────────────────────────────────────────────────────────────────


def test_chain_ranks(chain_graph):
    _, ranks = assign_ranks(chain_graph.nodes, chain_graph.edges)
    assert ranks == {"A": 0, "B": 1, "C": 2}


def test_ranks_use_longest_path():
    # A -> C directly and via B; C must sit below B
    graph = make_graph(["A", "B", "C"], ("A", "C"), ("A", "B"), ("B", "C"))
    _, ranks = assign_ranks(graph.nodes, graph.edges)
    assert ranks == {"A": 0, "B": 1, "C": 2}


def test_ranks_match_longest_path_on_dag():
    graph = make_graph(
        ["a", "b", "c", "d", "e", "f", "g"],
        ("a", "b"), ("b", "c"), ("a", "d"), ("d", "e"), ("e", "c"),
        ("f", "c"), ("c", "g"), ("f", "g"),
    )
    _, ranks = assign_ranks(graph.nodes, graph.edges)
    assert ranks == _longest_path_ranks(graph)
    assert ranks["c"] == 3
    assert ranks["g"] == 4


def test_two_node_cycle_stays_at_rank_zero():
    graph = make_graph(["A", "B"], ("A", "B"), ("B", "A"))
    order, ranks = assign_ranks(graph.nodes, graph.edges)
    assert order == ["A", "B"]
    assert ranks == {"A": 0, "B": 0}


def test_cycle_fallback_logs_warning(caplog):
    graph = make_graph(["A", "B"], ("A", "B"), ("B", "A"))
    with caplog.at_level(logging.WARNING, logger="graphscene.layout"):
        assign_ranks(graph.nodes, graph.edges)
    assert "cycle" in caplog.text


def test_cycle_reached_from_source_uses_single_pass():
    # S feeds a two-node cycle; input order processing propagates once
    graph = make_graph(["S", "A", "B"], ("S", "A"), ("A", "B"), ("B", "A"))
    _, ranks = assign_ranks(graph.nodes, graph.edges)
    assert ranks == {"S": 0, "A": 3, "B": 2}


# ─── Coordinates ─────────────────────────────────────────────────────────────


def test_scenario_top_to_bottom_chain(chain_graph):
    positioned = layout_graph(chain_graph, direction="TB", node_gap=180, rank_gap=140, max_per_rank=4)
    assert _coords(positioned) == {"A": (0, 0), "B": (0, 180), "C": (0, 360)}


def test_direction_defaults_to_left_to_right():
    graph = make_graph(["A", "B", "C"], ("A", "B"), ("B", "C"))
    positioned = layout_graph(graph)
    assert _coords(positioned) == {"A": (0, 0), "B": (180, 0), "C": (360, 0)}


def test_direction_from_hints_is_case_insensitive():
    graph = make_graph(["A", "B"], ("A", "B"), direction="tb")
    positioned = layout_graph(graph)
    assert _coords(positioned) == {"A": (0, 0), "B": (0, 180)}


def test_unknown_direction_lays_out_left_to_right():
    graph = make_graph(["A", "B"], ("A", "B"))
    positioned = layout_graph(graph, direction="diagonal")
    assert _coords(positioned) == {"A": (0, 0), "B": (180, 0)}


def test_cyclic_pair_shares_rank_zero():
    graph = make_graph(["A", "B"], ("A", "B"), ("B", "A"))
    positioned = layout_graph(graph, direction="LR")
    assert _coords(positioned) == {"A": (0, -90), "B": (0, 90)}


def test_wide_rank_is_split_into_rows():
    ids = [f"n{i}" for i in range(6)]
    graph = make_graph(ids)
    positioned = layout_graph(graph, direction="TB", node_gap=180, rank_gap=140, max_per_rank=4)
    coords = _coords(positioned)
    assert coords["n0"] == (-270, -70)
    assert coords["n1"] == (-90, -70)
    assert coords["n2"] == (90, -70)
    assert coords["n3"] == (270, -70)
    assert coords["n4"] == (-90, 70)
    assert coords["n5"] == (90, 70)


def test_rows_swap_axes_left_to_right():
    graph = make_graph(["a", "b", "c"])
    positioned = layout_graph(graph, direction="LR", max_per_rank=2)
    coords = _coords(positioned)
    assert coords["a"] == (-70, -90)
    assert coords["b"] == (-70, 90)
    assert coords["c"] == (70, 0)


def test_layout_does_not_mutate_input(chain_graph):
    before = chain_graph.model_dump()
    positioned = layout_graph(chain_graph)
    assert chain_graph.model_dump() == before
    assert positioned is not chain_graph


def test_layout_is_idempotent(chain_graph):
    first = layout_graph(chain_graph, direction="TB")
    second = layout_graph(first, direction="TB")
    assert _coords(first) == _coords(second)
    assert _coords(first) == _coords(layout_graph(chain_graph, direction="TB"))


def test_dangling_edges_do_not_affect_ranks():
    graph = Graph(
        nodes=[Node(id="A"), Node(id="B")],
        edges=[Edge(id="x", source="ghost", target="B"), Edge(id="y", source="A", target="ghost")],
    )
    positioned = layout_graph(graph, direction="TB")
    assert _coords(positioned) == {"A": (-90, 0), "B": (90, 0)}


def test_empty_graph():
    assert layout_graph(Graph()).nodes == []


def test_max_per_rank_below_one_is_clamped():
    graph = make_graph(["A", "B"])
    positioned = layout_graph(graph, direction="TB", max_per_rank=0)
    assert _coords(positioned) == {"A": (0, -70), "B": (0, 70)}


@pytest.mark.parametrize("direction", ["TB", "LR"])
def test_every_node_gets_distinct_coordinates(direction):
    graph = make_graph(
        [f"n{i}" for i in range(10)],
        ("n0", "n1"), ("n0", "n2"), ("n0", "n3"), ("n0", "n4"), ("n0", "n5"),
        ("n1", "n6"), ("n2", "n7"), ("n8", "n9"),
    )
    positioned = layout_graph(graph, direction=direction)
    coords = list(_coords(positioned).values())
    assert len(set(coords)) == len(coords)


def _fan_out(count: int) -> Graph:
    """`count` sources, each feeding its own target."""
    sources = [f"s{i}" for i in range(count)]
    targets = [f"t{i}" for i in range(count)]
    return make_graph(sources + targets, *zip(sources, targets))


def test_split_ranks_do_not_interleave():
    positioned = layout_graph(_fan_out(9), direction="TB")
    coords = _coords(positioned)
    rank0 = [coords[f"s{i}"][1] for i in range(9)]
    rank1 = [coords[f"t{i}"][1] for i in range(9)]
    assert max(rank0) < min(rank1)
    assert sorted(set(rank0)) == [-140, 0, 140]
    assert sorted(set(rank1)) == [320, 460, 600]


@pytest.mark.parametrize("count", [5, 9, 13])
def test_boxes_in_adjacent_ranks_never_intersect(count):
    positioned = layout_graph(_fan_out(count), direction="TB")
    boxes = {n.id: node_box(n) for n in positioned.nodes}

    def intersects(a, b):
        return a[0] < b[2] and b[0] < a[2] and a[1] < b[3] and b[1] < a[3]

    overlapping = [
        (s, t)
        for s in (f"s{i}" for i in range(count))
        for t in (f"t{i}" for i in range(count))
        if intersects(boxes[s], boxes[t])
    ]
    assert overlapping == []


def test_single_row_ranks_keep_regular_spacing():
    graph = make_graph(["A", "B", "C", "D"], ("A", "B"), ("A", "C"), ("B", "D"))
    coords = _coords(layout_graph(graph, direction="TB"))
    assert coords["A"][1] == 0
    assert coords["B"][1] == coords["C"][1] == 180
    assert coords["D"][1] == 360
