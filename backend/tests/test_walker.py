"""Tests for corpus discovery."""

import os
import types

import pytest

from ingestion.walker import walk_json_files


@pytest.mark.unit
class TestWalkJsonFiles:

    def test_returns_a_generator(self, corpus):
        assert isinstance(walk_json_files(corpus), types.GeneratorType)

    def test_yields_json_files_recursively_in_name_order(self, corpus):
        found = [p.relative_to(corpus).as_posix() for p in walk_json_files(corpus)]
        assert found == [
            "ai/0001_Summarize.json",
            "crm/6102_Slack_Lead_Notify.json",
            "ops/123_.json",
            "ops/broken.json",
            "ops/empty.json",
            "ops/nightly.json",
            "package.json",
        ]

    def test_skips_hidden_directories(self, corpus):
        assert all(".git" not in p.parts for p in walk_json_files(corpus))

    def test_ignores_non_json_files(self, corpus):
        assert all(p.suffix == ".json" for p in walk_json_files(corpus))

    def test_restartable(self, corpus):
        assert list(walk_json_files(corpus)) == list(walk_json_files(corpus))

    def test_missing_root_yields_nothing(self, tmp_path):
        assert list(walk_json_files(tmp_path / "nope")) == []

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root can list unreadable directories",
    )
    def test_unlistable_directory_is_skipped(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "a.json").write_text("{}")
        (tmp_path / "b.json").write_text("{}")
        locked.chmod(0)
        try:
            found = [p.name for p in walk_json_files(tmp_path)]
        finally:
            locked.chmod(0o755)
        assert found == ["b.json"]

    def test_is_lazy(self, tmp_path):
        for i in range(3):
            (tmp_path / f"{i}.json").write_text("{}")
        walker = walk_json_files(tmp_path)
        first = next(walker)
        (tmp_path / "2.json").unlink()
        assert first.name == "0.json"
        # Entries of a directory are listed once, when it is first entered
        assert [p.name for p in walker] == ["1.json", "2.json"]
