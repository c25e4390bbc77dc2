"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from conftest import make_nested
from json_graph.cli import main


class TestCLI:
    """Tests for the json-graph command group."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def write_json(self, path, data):
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_build_writes_graph(self, temp_dir, sample_document):
        """Test building a graph file from a JSON file."""
        source = self.write_json(temp_dir / "doc.json", sample_document)
        output = temp_dir / "graph.json"

        result = self.runner.invoke(main, ["build", str(source), "-o", str(output)])

        assert result.exit_code == 0
        graph = json.loads(output.read_text(encoding="utf-8"))
        assert graph["nodes"][0]["fieldName"] == "root"
        assert len(graph["edges"]) == len(graph["nodes"]) - 1
        assert any(node["position"]["x"] > 0 for node in graph["nodes"])

    def test_build_without_layout(self, temp_dir):
        """Test that --no-layout leaves positions at the origin."""
        source = self.write_json(temp_dir / "doc.json", {"a": [1, 2]})
        output = temp_dir / "graph.json"

        result = self.runner.invoke(main, ["build", str(source), "--no-layout", "-o", str(output)])

        assert result.exit_code == 0
        graph = json.loads(output.read_text(encoding="utf-8"))
        assert all(node["position"] == {"x": 0, "y": 0} for node in graph["nodes"])

    def test_build_with_max_depth(self, temp_dir):
        """Test the depth guard option."""
        source = self.write_json(temp_dir / "doc.json", make_nested(10))
        output = temp_dir / "graph.json"

        result = self.runner.invoke(main, ["build", str(source), "--max-depth", "3", "-o", str(output)])

        assert result.exit_code == 0
        graph = json.loads(output.read_text(encoding="utf-8"))
        assert len(graph["nodes"]) == 4
        assert graph["nodes"][-1]["isPlaceholder"] is True
        assert graph["diagnostics"][0]["errorType"] == "structural_guard"

    def test_build_with_config_file(self, temp_dir):
        """Test loading engine options from a JSON file."""
        source = self.write_json(temp_dir / "doc.json", {"notes": {"a": 1}, "meta": 2})
        config = self.write_json(temp_dir / "config.json", {"metadataFields": ["notes"]})
        output = temp_dir / "graph.json"

        result = self.runner.invoke(main, ["build", str(source), "--config", str(config), "-o", str(output)])

        assert result.exit_code == 0
        graph = json.loads(output.read_text(encoding="utf-8"))
        assert [edge["kind"] for edge in graph["edges"]] == ["metadata_link", "metadata_link", "normal"]

    def test_build_invalid_json(self, temp_dir):
        """Test that invalid input exits with an error."""
        source = temp_dir / "bad.json"
        source.write_text('{"a": ', encoding="utf-8")

        result = self.runner.invoke(main, ["build", str(source)])

        assert result.exit_code == 1
        assert "Invalid JSON input" in result.output

    def test_reconstruct_graph_file(self, temp_dir, sample_document):
        """Test rebuilding JSON from a graph file."""
        source = self.write_json(temp_dir / "doc.json", sample_document)
        graph_file = temp_dir / "graph.json"
        rebuilt_file = temp_dir / "rebuilt.json"

        self.runner.invoke(main, ["build", str(source), "-o", str(graph_file)])
        result = self.runner.invoke(main, ["reconstruct", str(graph_file), "-o", str(rebuilt_file)])

        assert result.exit_code == 0
        assert json.loads(rebuilt_file.read_text(encoding="utf-8")) == sample_document

    def test_reconstruct_invalid_graph(self, temp_dir):
        """Test that malformed graph files are rejected."""
        graph_file = self.write_json(temp_dir / "graph.json", {"nodes": [{"kind": "object"}]})

        result = self.runner.invoke(main, ["reconstruct", str(graph_file)])

        assert result.exit_code == 1
        assert "invalid graph file" in result.output

    def test_roundtrip_lossless(self, temp_dir, sample_document):
        """Test the round trip check on a supported document."""
        source = self.write_json(temp_dir / "doc.json", sample_document)

        result = self.runner.invoke(main, ["roundtrip", str(source)])

        assert result.exit_code == 0
        assert "lossless" in result.output

    def test_roundtrip_lossy(self, temp_dir):
        """Test the round trip check on a truncated document."""
        source = self.write_json(temp_dir / "doc.json", make_nested(5))

        result = self.runner.invoke(main, ["roundtrip", str(source), "--max-depth", "2"])

        assert result.exit_code == 1
        assert "changed the document" in result.output
        assert "Max depth 2 reached" in result.output

    def test_build_rejects_non_object_config(self, temp_dir):
        """Test that a config file holding a list exits with an error."""
        source = self.write_json(temp_dir / "doc.json", {"a": 1})
        config = self.write_json(temp_dir / "config.json", ["maxDepth", 5])

        result = self.runner.invoke(main, ["build", str(source), "--config", str(config)])

        assert result.exit_code == 1
        assert "must contain a JSON object" in result.output
        assert not isinstance(result.exception, AttributeError)

    def test_build_rejects_mistyped_config_values(self, temp_dir):
        """Test that a config value of the wrong type exits with an error."""
        source = self.write_json(temp_dir / "doc.json", {"a": 1})
        config = self.write_json(temp_dir / "config.json", {"maxDepth": "5"})

        result = self.runner.invoke(main, ["build", str(source), "--config", str(config)])

        assert result.exit_code == 1
        assert "max_depth must be an integer" in result.output
