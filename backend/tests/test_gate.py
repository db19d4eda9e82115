"""Tests for the document gate and workflow document model."""

import json

import pytest

from conftest import make_workflow, write_json
from core.constants import SkipReason
from ingestion.documents import WorkflowDocument, WorkflowNode
from ingestion.gate import SKIP_FILENAMES, inspect_file


@pytest.mark.unit
class TestInspectFile:

    def test_accepts_workflow(self, tmp_path):
        path = write_json(tmp_path / "wf.json", make_workflow(["n8n-nodes-base.slack", "n8n-nodes-base.set"]))
        result = inspect_file(path)
        assert result.accepted
        assert result.skip_reason is None
        assert result.signal == ("n8n-nodes-base.slack", "n8n-nodes-base.set")
        assert result.document.node_count == 2

    @pytest.mark.parametrize("filename", sorted(SKIP_FILENAMES))
    def test_denylisted_names_skip_regardless_of_content(self, tmp_path, filename):
        path = write_json(tmp_path / filename, make_workflow(["n8n-nodes-base.slack"], name="Looks real"))
        assert inspect_file(path).skip_reason is SkipReason.NOT_A_WORKFLOW

    def test_dotfile_is_not_a_workflow(self, tmp_path):
        path = write_json(tmp_path / ".workflow.json", make_workflow(["n8n-nodes-base.slack"]))
        assert inspect_file(path).skip_reason is SkipReason.NOT_A_WORKFLOW

    def test_invalid_json_is_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"nodes": [', encoding="utf-8")
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    def test_undecodable_bytes_are_bad_json(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"name": "caf\xe9", "nodes": [{"type": "x"}]}')
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    def test_unreadable_path_is_bad_json(self, tmp_path):
        # A directory named like a file cannot be read as bytes
        path = tmp_path / "dir.json"
        path.mkdir()
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    def test_empty_nodes_is_not_a_workflow(self, tmp_path):
        path = write_json(tmp_path / "empty.json", {"name": "Empty", "nodes": []})
        assert inspect_file(path).skip_reason is SkipReason.NOT_A_WORKFLOW

    @pytest.mark.parametrize("value", [
        {"name": "no nodes"},
        {"nodes": {"0": {"type": "x"}}},
        {"nodes": "n8n-nodes-base.slack"},
        [{"type": "n8n-nodes-base.slack"}],
        "workflow",
        None,
    ])
    def test_non_workflow_shapes(self, tmp_path, value):
        path = write_json(tmp_path / "x.json", value)
        assert inspect_file(path).skip_reason is SkipReason.NOT_A_WORKFLOW

    def test_oversize_is_too_large_even_if_valid(self, tmp_path):
        workflow = make_workflow(["n8n-nodes-base.slack"], name="Big")
        workflow["pinData"] = "x" * 500
        path = write_json(tmp_path / "big.json", workflow)
        assert inspect_file(path, max_bytes=100).skip_reason is SkipReason.TOO_LARGE

    def test_size_checked_before_parsing(self, tmp_path):
        path = tmp_path / "big_and_broken.json"
        path.write_text("{" * 200, encoding="utf-8")
        assert inspect_file(path, max_bytes=100).skip_reason is SkipReason.TOO_LARGE

    def test_size_limit_is_inclusive(self, tmp_path):
        path = write_json(tmp_path / "edge.json", make_workflow(["n8n-nodes-base.slack"]))
        size = path.stat().st_size
        assert inspect_file(path, max_bytes=size).accepted
        assert inspect_file(path, max_bytes=size - 1).skip_reason is SkipReason.TOO_LARGE


@pytest.mark.unit
class TestWorkflowDocument:

    def test_signal_drops_missing_and_empty_types(self):
        doc = WorkflowDocument.from_json({"nodes": [
            {"type": "a"}, {"name": "untyped"}, {"type": ""}, {"type": 42}, "junk", {"type": "b"},
        ]})
        assert doc.node_type_signal() == ("a", "b")
        assert doc.node_count == 6

    def test_non_string_name_is_absent(self):
        doc = WorkflowDocument.from_json({"name": ["x"], "nodes": [{"type": "a"}]})
        assert doc.name is None

    def test_raw_is_kept_verbatim(self):
        raw = json.loads(json.dumps(make_workflow(["a"], name="Kept")))
        doc = WorkflowDocument.from_json(raw)
        assert doc.raw is raw

    def test_node_from_non_dict(self):
        assert WorkflowNode.from_raw(None) == WorkflowNode()


@pytest.mark.unit
class TestGateRejectsNonStandardJson:

    def test_deep_nesting_is_bad_json(self, tmp_path):
        path = tmp_path / "nested.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    def test_deep_nesting_inside_a_workflow_is_bad_json(self, tmp_path):
        path = tmp_path / "nested_wf.json"
        depth = 50_000
        path.write_text(
            '{"nodes": [{"type": "n8n-nodes-base.set", "parameters": ' + "[" * depth + "]" * depth + "}]}",
            encoding="utf-8",
        )
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_constants_are_bad_json(self, tmp_path, token):
        path = tmp_path / "constant.json"
        path.write_text(
            '{"name": "x", "nodes": [{"type": "n8n-nodes-base.set", "v": %s}]}' % token,
            encoding="utf-8",
        )
        assert inspect_file(path).skip_reason is SkipReason.BAD_JSON

    def test_finite_numbers_still_accepted(self, tmp_path):
        path = write_json(tmp_path / "numbers.json", {
            "name": "Numbers",
            "nodes": [{"type": "n8n-nodes-base.set", "v": 1e308, "w": -0.5}],
        })
        assert inspect_file(path).accepted
