"""
Tests for the all-pairs path weight engine.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from pathweight.core.exceptions import SearchBudgetExceededError
from pathweight.core.graph import GraphModel
from pathweight.core.weights import (
    MAX_HOPS_LIMIT,
    PathWeightEngine,
    StrategyType,
    WeightResult,
    run,
)
from pathweight.core.weights.algorithms import (
    AccumulatingStrategy,
    MaterializingStrategy,
    ParallelStrategy,
)
from pathweight.core.weights.algorithms.parallel import _search_shard, split_pairs
from pathweight.core.weights.utils import SearchBudget, candidate_pairs


def test_single_edge(single_edge_graph):
    """Test that one edge yields exactly one path."""
    total, node_weights, edge_weights = PathWeightEngine().run(single_edge_graph, 13)
    assert total == 1
    assert node_weights == {1: 1, 2: 1}
    assert edge_weights == {(1, 2): 1}


def test_triangle(triangle_graph):
    """Test that each pair of a triangle has a direct and a detour path."""
    total, node_weights, edge_weights = PathWeightEngine().run(triangle_graph, 13)
    assert total == 6
    assert node_weights == {1: 5, 2: 5, 3: 5}
    assert edge_weights == {(1, 2): 3, (1, 3): 3, (2, 3): 3}


def test_disjoint_edges(two_component_graph):
    """Test that pairs in different components contribute nothing."""
    result = PathWeightEngine().run(two_component_graph)
    assert result.total_paths == 2
    assert result.node_weights == {1: 1, 2: 1, 3: 1, 4: 1}
    assert result.edge_weights == {(1, 2): 1, (3, 4): 1}
    assert result.pairs_searched == 2


def test_complete_graph(complete_graph):
    """Test K4: every pair has 1 direct, 2 one-stop and 2 two-stop paths."""
    result = PathWeightEngine().run(complete_graph)
    assert result.total_paths == 30
    assert set(result.node_weights.values()) == {24}
    assert set(result.edge_weights.values()) == {11}


def test_path_reaching_target_on_cutoff_hop_is_not_counted(path_graph):
    """Test the exclusive hop bound: 1-3 needs two edges and max_hops=2 drops it."""
    result = PathWeightEngine().run(path_graph, max_hops=2)
    assert result.total_paths == 2
    assert result.node_weights == {1: 1, 2: 2, 3: 1}
    assert result.edge_weights == {(1, 2): 1, (2, 3): 1}


def test_max_hops_one_counts_nothing_by_default(path_graph):
    """Test that max_hops=1 leaves only zero-edge paths, which never join a pair."""
    result = PathWeightEngine().run(path_graph, max_hops=1)
    assert result.total_paths == 0
    assert result.node_weights == {1: 0, 2: 0, 3: 0}
    assert result.edge_weights == {(1, 2): 0, (2, 3): 0}


def test_count_boundary_paths(path_graph):
    """Test that boundary counting includes paths of exactly max_hops edges."""
    engine = PathWeightEngine(count_boundary_paths=True)
    assert engine.run(path_graph, max_hops=1).total_paths == 2
    assert engine.run(path_graph, max_hops=2).total_paths == 3


def test_longer_bound_counts_two_hop_path(path_graph):
    """Test the path graph once the bound admits the two-edge path."""
    result = PathWeightEngine().run(path_graph, max_hops=3)
    assert result.total_paths == 3
    assert result.node_weights == {1: 2, 2: 3, 3: 2}
    assert result.edge_weights == {(1, 2): 2, (2, 3): 2}


def test_max_hops_zero(triangle_graph):
    """Test that a zero hop bound prunes every branch."""
    assert PathWeightEngine().run(triangle_graph, max_hops=0).total_paths == 0


def test_empty_graph_yields_empty_tables():
    """Test that a graph without pairs is a valid, empty outcome."""
    result = PathWeightEngine().run(GraphModel.from_edges([]))
    assert result.total_paths == 0
    assert result.node_weights == {}
    assert result.edge_weights == {}
    assert result.is_empty


def test_parallel_edges_multiply_paths():
    """Test that each parallel adjacency entry carries its own paths."""
    result = PathWeightEngine().run(GraphModel.from_edges([(1, 2), (1, 2), (2, 3)]))
    # 1-2 twice, 2-3 once, 1-2-3 twice
    assert result.total_paths == 5
    assert result.edge_weights == {(1, 2): 4, (2, 3): 3}
    assert result.node_weights == {1: 4, 2: 5, 3: 3}


def test_isolated_nodes_are_excluded(mixed_graph):
    """Test that an id without edges never appears in the tables."""
    result = PathWeightEngine().run(mixed_graph)
    assert 5 not in result.node_weights
    assert set(result.node_weights) == set(mixed_graph.active_nodes)
    assert all(5 not in key for key in result.edge_weights)


def test_edge_weight_is_symmetric(mixed_graph):
    """Test that edge lookups ignore orientation."""
    result = PathWeightEngine().run(mixed_graph)
    for a, b in mixed_graph.edges():
        assert result.edge_weight(a, b) == result.edge_weight(b, a)
        assert result.edge_weight(a, b) > 0
    assert result.edge_weight(0, 8) == 0
    assert result.node_weight(5) == 0


def test_conservation(mixed_graph):
    """Test that weight sums match total path lengths."""
    result = PathWeightEngine(StrategyType.MATERIALIZING).run(mixed_graph, max_hops=5)
    paths = result.paths.paths
    assert len(paths) == result.total_paths
    assert sum(result.node_weights.values()) == sum(len(path) for path in paths)
    assert sum(result.edge_weights.values()) == sum(len(path) - 1 for path in paths)


def test_paths_are_simple_and_bounded(complete_graph):
    """Test that no path repeats a node or reaches the hop bound."""
    result = PathWeightEngine("materializing").run(complete_graph, max_hops=3)
    assert result.total_paths == len(result.paths)
    for path in result.paths:
        assert len(set(path)) == len(path)
        assert len(path) - 1 <= 2
        for left, right in zip(path, path[1:]):
            assert complete_graph.has_edge(left, right)


def test_materialized_paths_in_search_order(triangle_graph):
    """Test the order in which paths are discovered."""
    result = PathWeightEngine("materializing").run(triangle_graph)
    assert result.paths.paths == [
        (1, 2),
        (1, 3, 2),
        (1, 2, 3),
        (1, 3),
        (2, 1, 3),
        (2, 3),
    ]


def test_path_store_queries(triangle_graph):
    """Test lazily computed single node and edge weights."""
    store = PathWeightEngine("materializing").run(triangle_graph).paths
    assert store.node_weight(1) == 5
    assert store.edge_weight(2, 1) == 3
    assert store.edge_weight(1, 2) == 3
    assert store.node_weight(9) == 0


def test_determinism(mixed_graph):
    """Test that repeated runs give identical results."""
    engine = PathWeightEngine()
    first = engine.run(mixed_graph, max_hops=6)
    second = engine.run(mixed_graph, max_hops=6)
    assert first == second
    assert list(first.node_weights.items()) == list(second.node_weights.items())


@pytest.mark.parametrize("max_hops", [0, 1, 2, 3, 4, 13])
def test_strategies_agree(mixed_graph, max_hops):
    """Test that every strategy produces the same tables."""
    expected = AccumulatingStrategy().run(mixed_graph, max_hops)
    materialized = MaterializingStrategy().run(mixed_graph, max_hops)
    with ThreadPoolExecutor(max_workers=2) as executor:
        parallel = ParallelStrategy(workers=2, executor=executor).run(mixed_graph, max_hops)

    for result in (materialized, parallel):
        assert result.total_paths == expected.total_paths
        assert result.node_weights == expected.node_weights
        assert result.edge_weights == expected.edge_weights


def test_parallel_strategy_name_and_empty_graph():
    """Test the parallel strategy on a graph without pairs."""
    result = ParallelStrategy(workers=1).run(GraphModel.from_edges([]))
    assert result.strategy == "parallel"
    assert result.total_paths == 0


def test_parallel_strategy_rejects_bad_worker_count():
    """Test worker count validation."""
    with pytest.raises(ValueError, match="workers must be positive"):
        ParallelStrategy(workers=0)


def test_split_pairs():
    """Test round-robin sharding of the pair list."""
    pairs = [(1, 2), (1, 3), (1, 4), (2, 3), (2, 4)]
    assert split_pairs(pairs, 2) == [[(1, 2), (1, 4), (2, 4)], [(1, 3), (2, 3)]]
    assert len(split_pairs(pairs, 10)) == 5
    assert split_pairs([], 3) == [[]]


def test_candidate_pairs_skip_other_components(mixed_graph):
    """Test that only same-component pairs are searched, in ascending order."""
    pairs = candidate_pairs(mixed_graph)
    assert pairs == sorted(pairs)
    assert (7, 8) in pairs
    assert (1, 7) not in pairs
    assert len(pairs) == 15 + 1


def test_invalid_max_hops(triangle_graph):
    """Test hop bound validation."""
    engine = PathWeightEngine()
    with pytest.raises(ValueError, match="max_hops must be non-negative"):
        engine.run(triangle_graph, -1)
    with pytest.raises(TypeError, match="max_hops must be an integer"):
        engine.run(triangle_graph, "3")


def test_unknown_strategy():
    """Test strategy name validation."""
    with pytest.raises(ValueError, match="Unknown strategy 'bogus'"):
        PathWeightEngine("bogus")


def test_pair_budget(triangle_graph):
    """Test that a graph needing too many pair searches is refused up front."""
    with pytest.raises(SearchBudgetExceededError, match="3 node pairs to search, limit is 2"):
        PathWeightEngine(max_pairs=2).run(triangle_graph)
    assert PathWeightEngine(max_pairs=3).run(triangle_graph).total_paths == 6


def test_deadline_already_passed(triangle_graph):
    """Test that an expired deadline stops the search before the first pair."""
    strategy = AccumulatingStrategy(budget=SearchBudget(deadline_at=0.0))
    with pytest.raises(SearchBudgetExceededError) as exc_info:
        strategy.run(triangle_graph)
    assert exc_info.value.pairs_searched == 0


def test_generous_deadline(triangle_graph):
    """Test that a deadline which is not hit changes nothing."""
    assert PathWeightEngine(deadline_seconds=60).run(triangle_graph).total_paths == 6


def test_result_unpacks_and_serializes(triangle_graph):
    """Test the WeightResult container."""
    result = run(triangle_graph, 13)
    assert isinstance(result, WeightResult)
    total, node_weights, edge_weights = result
    assert total == 6
    data = result.to_dict()
    assert data["total_paths"] == 6
    assert data["strategy"] == "accumulating"
    assert data["max_hops"] == 13
    assert data["node_weights"] == {"1": 5, "2": 5, "3": 5}
    assert data["edge_weights"] == {"1-2": 3, "1-3": 3, "2-3": 3}


def test_engine_ranking_shortcuts(triangle_graph):
    """Test the ranking helpers exposed on the engine."""
    result = PathWeightEngine().run(triangle_graph)
    assert PathWeightEngine.top_nodes_by_weight(result.node_weights, 2) == [(1, 5), (2, 5)]
    assert PathWeightEngine.top_edges_by_weight(result.edge_weights, 1) == [((1, 2), 3)]


def test_parallel_strategy_with_process_pool(triangle_graph):
    """Test the default process pool against the sequential result."""
    expected = AccumulatingStrategy().run(triangle_graph)
    result = ParallelStrategy(workers=2).run(triangle_graph)
    assert result.total_paths == expected.total_paths == 6
    assert result.node_weights == expected.node_weights
    assert result.edge_weights == expected.edge_weights


def test_deadline_passes_inside_pair_search(tailed_clique_graph, fake_clock):
    """Test that a deadline hit in the middle of a pair stops the run."""
    strategy = AccumulatingStrategy(budget=SearchBudget())
    # First pair check and second pair check pass, first in-search check fails
    strategy.budget.deadline_at = fake_clock.now + 2.5
    with pytest.raises(SearchBudgetExceededError) as exc_info:
        strategy.run(tailed_clique_graph)

    error = exc_info.value
    assert error.pairs_searched == 1
    assert str(error).endswith("deadline passed after 1 pairs")
    assert isinstance(error.__cause__, SearchBudgetExceededError)
    assert error.__cause__.pairs_searched is None


def test_parallel_memory_limit(triangle_graph, growing_memory):
    """Test that the memory limit applies under the parallel strategy."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        engine = PathWeightEngine("parallel", max_memory_mb=1, workers=2, executor=executor)
        with pytest.raises(MemoryError, match="exceeds limit of 1.0MB"):
            engine.run(triangle_graph)


def test_shard_search_checks_memory(triangle_graph, growing_memory):
    """Test that a worker shard builds its own memory guard."""
    pairs = candidate_pairs(triangle_graph)
    with pytest.raises(MemoryError):
        _search_shard(triangle_graph, pairs, 13, False, None, 1)
    total, node_weights, _ = _search_shard(triangle_graph, pairs, 13, False, None, None)
    assert total == 6
    assert node_weights == {1: 5, 2: 5, 3: 5}


def test_max_hops_limit(triangle_graph):
    """Test that hop bounds above the limit are refused."""
    with pytest.raises(ValueError, match=f"max_hops cannot exceed {MAX_HOPS_LIMIT}"):
        PathWeightEngine().run(triangle_graph, MAX_HOPS_LIMIT + 1)
    with pytest.raises(ValueError, match="max_hops cannot exceed"):
        AccumulatingStrategy().search_pair(triangle_graph, 1, 2, 2000, lambda path: None)


def test_long_chain_at_hop_limit():
    """Test a search as deep as the hop limit allows."""
    graph = GraphModel.from_edges([(i, i + 1) for i in range(MAX_HOPS_LIMIT)])
    paths = []
    strategy = AccumulatingStrategy(count_boundary_paths=True)
    assert strategy.search_pair(graph, 0, MAX_HOPS_LIMIT, MAX_HOPS_LIMIT, paths.append) == 1
    assert paths[0] == tuple(range(MAX_HOPS_LIMIT + 1))
    assert AccumulatingStrategy().search_pair(graph, 0, MAX_HOPS_LIMIT, MAX_HOPS_LIMIT, paths.append) == 0
