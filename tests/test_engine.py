"""Integration tests for the JSON graph engine."""

import random

import pytest

import json_graph
from conftest import make_nested, make_nested_lists
from json_graph import JSONGraphEngine, EngineConfig, EdgeKind, NodeKind


def count_members(value):
    """Count object keys and array elements reachable in ``value``."""
    if isinstance(value, dict):
        return len(value) + sum(count_members(v) for v in value.values())
    if isinstance(value, list):
        return len(value) + sum(count_members(v) for v in value)
    return 0


def random_json(rng, depth):
    """Generate a random JSON value nested at most ``depth`` levels."""
    choices = ["str", "int", "float", "bool", "null"]
    if depth > 0:
        choices += ["dict", "list", "dict", "list"]
    choice = rng.choice(choices)
    if choice == "dict":
        return {f"k{i}": random_json(rng, depth - 1) for i in range(rng.randint(0, 4))}
    if choice == "list":
        return [random_json(rng, depth - 1) for _ in range(rng.randint(0, 4))]
    if choice == "str":
        return "".join(rng.choice("abcxyz \"'\n") for _ in range(rng.randint(0, 150)))
    if choice == "int":
        return rng.randint(-1000, 1000)
    if choice == "float":
        return rng.uniform(-1e6, 1e6)
    if choice == "bool":
        return rng.random() < 0.5
    return None


class TestEngineLaws:
    """Property checks over the build/layout/reconstruct boundary."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = JSONGraphEngine()

    @pytest.mark.parametrize("seed", range(25))
    def test_roundtrip_random_documents(self, seed):
        """Test that random documents survive build and reconstruct."""
        value = random_json(random.Random(seed), depth=6)
        result = self.engine.build(value)
        assert self.engine.reconstruct(result.nodes, result.edges) == value

    @pytest.mark.parametrize("value", [make_nested(49), make_nested_lists(49, leaf="deep")])
    def test_roundtrip_at_depth_49(self, value):
        """Test the deepest fully supported documents."""
        result = self.engine.build(value)
        assert not result.truncated
        assert self.engine.reconstruct(result.nodes, result.edges) == value

    @pytest.mark.parametrize("seed", range(10))
    def test_node_count(self, seed):
        """Test that nodes equal one root plus every key and element."""
        value = random_json(random.Random(seed), depth=5)
        result = self.engine.build(value)
        assert len(result.nodes) == 1 + count_members(value)
        assert len(result.edges) == len(result.nodes) - 1

    def test_depth_matches_edge_distance(self, sample_document):
        """Test that stored depth equals edges from the root."""
        result = self.engine.build(sample_document)
        parent = {edge.target: edge.source for edge in result.edges}
        by_id = {node.id: node for node in result.nodes}

        for node in result.nodes:
            hops, current = 0, node.id
            while current in parent:
                current = parent[current]
                hops += 1
            assert by_id[current].is_root
            assert node.depth == hops

    def test_array_order_survives_resorting(self):
        """Test that element order comes from edges, not the node list."""
        value = ["a", "b", "c"]
        result = self.engine.build(value)

        for key in (lambda n: n.id, lambda n: n.path, lambda n: -n.depth, lambda n: n.display_value):
            nodes = sorted(result.nodes, key=key, reverse=True)
            assert self.engine.reconstruct(nodes, result.edges) == value

    def test_guard_on_deep_input(self):
        """Test that depth 1000 terminates with a placeholder."""
        result = self.engine.build(make_nested(1000))

        assert len(result.nodes) == 51
        assert sum(1 for n in result.nodes if n.is_placeholder) == 1
        assert result.truncated

    def test_layout_is_decoupled_from_reconstruct(self, sample_document):
        """Test that positions never affect the rebuilt JSON."""
        result = self.engine.build_and_layout(sample_document)
        assert any(n.position.x > 0 for n in result.nodes)
        assert self.engine.reconstruct(result.nodes, result.edges) == sample_document


class TestScenarios:
    """End-to-end scenarios through the module-level API."""

    def test_object_with_array(self, scenario_json):
        """Test build of a five-node document."""
        result = json_graph.build(scenario_json)
        assert (len(result.nodes), len(result.edges)) == (5, 4)

    def test_string_root(self):
        """Test a bare string document."""
        result = json_graph.build("just a string")
        assert (len(result.nodes), len(result.edges)) == (1, 0)
        assert json_graph.reconstruct(result.nodes, result.edges) == "just a string"

    def test_empty_array_node(self):
        """Test that an empty array reconstructs as a list."""
        result = json_graph.build({"list": []})
        array = [n for n in result.nodes if n.kind == NodeKind.ARRAY][0]
        assert array.child_count == 0
        assert json_graph.reconstruct(result.nodes, result.edges) == {"list": []}

    def test_metadata_branch(self):
        """Test that the meta branch is tagged while siblings are not."""
        result = json_graph.build({"meta": {"a": [1]}, "content": {"b": 2}})
        kinds = {edge.target: edge.kind for edge in result.edges}
        nodes = {n.path: n for n in result.nodes}

        for path in ("root.meta", "root.meta.a", "root.meta.a[0]"):
            assert kinds[nodes[path].id] == EdgeKind.METADATA_LINK
        for path in ("root.content", "root.content.b"):
            assert kinds[nodes[path].id] == EdgeKind.NORMAL

    def test_module_layout(self, scenario_json):
        """Test the module-level layout function."""
        result = json_graph.build(scenario_json)
        laid_out = json_graph.layout(result.nodes, result.edges)
        assert [(n.position.x, n.position.y) for n in laid_out][:3] == [(0, 0), (280, 0), (280, 150)]


class TestEngineConfiguration:
    """Tests for engine construction options."""

    def test_keyword_overrides(self):
        """Test overriding config fields with keyword arguments."""
        engine = JSONGraphEngine(EngineConfig(max_display_length=10), max_depth=2)
        assert engine.config.max_depth == 2
        assert engine.config.max_display_length == 10
        assert engine.build(make_nested(5)).truncated

    def test_invalid_override_is_rejected(self):
        """Test that unknown options fail fast."""
        with pytest.raises(TypeError):
            JSONGraphEngine(unknown_option=True)

    def test_invalid_value_is_rejected(self):
        """Test that config validation runs on overrides."""
        with pytest.raises(ValueError):
            JSONGraphEngine(max_depth=0)

    def test_incremental_layout_option(self):
        """Test positions assigned while building."""
        result = JSONGraphEngine(incremental_layout=True).build({"a": 1})
        assert result.nodes[1].position.y == 100
