"""Tests for priority handling and source dispatch."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from versioning import get_version, get_version_sync
from versioning.models import EnvOptions, FileOptions, GitOptions, SourceKind, VersionOptions
from versioning.service import VersionResolutionService, normalize_priority


def make_service(options, env=None, git=None, file=None):
    """Create a service with instrumented sources."""
    env_source = MagicMock(return_value=env)
    git_source = AsyncMock(return_value=git)
    file_source = MagicMock(return_value=file)
    service = VersionResolutionService(
        options, env_source=env_source, git_source=git_source, file_source=file_source
    )
    return service, env_source, git_source, file_source


class TestNormalizePriority:
    """Test priority normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_priority([" ENV", "Git ", "FILE"]) == ["env", "git", "file"]

    def test_deduplicates_by_first_occurrence(self):
        assert normalize_priority(["file", "env", " FILE", "env"]) == ["file", "env"]

    def test_keeps_unknown_entries_with_warning(self, caplog):
        with caplog.at_level("WARNING", logger="versioning.service"):
            assert normalize_priority(["env", "svn"]) == ["env", "svn"]
        assert "svn" in caplog.text

    def test_accepts_source_kind_members(self):
        assert normalize_priority([SourceKind.GIT, "git", SourceKind.ENV]) == ["git", "env"]

    def test_appends_fallback(self, caplog):
        with caplog.at_level("WARNING", logger="versioning.service"):
            assert normalize_priority(["env"], "fall") == ["env", "fallback"]
        assert "fallback" in caplog.text

    def test_does_not_append_existing_fallback(self):
        assert normalize_priority(["fallback", "env"], "fall") == ["fallback", "env"]

    @pytest.mark.parametrize("fallback", [None, "", "   "])
    def test_blank_fallback_not_appended(self, fallback):
        assert normalize_priority(["env"], fallback) == ["env"]

    def test_empty(self):
        assert normalize_priority([]) == []


class TestVersionResolutionService:
    """Test ordered, short-circuiting resolution."""

    def test_default_priority_order(self):
        service, env, git, file = make_service(VersionOptions(), git="main-abc", file="1.0.0")
        assert asyncio.run(service.resolve()) == "main-abc"
        env.assert_called_once()
        git.assert_awaited_once()
        file.assert_not_called()

    def test_stops_at_first_result(self):
        options = VersionOptions(priority=["file", "env", "git"])
        service, env, git, file = make_service(options, env="2.0.0", file="1.0.0")
        assert asyncio.run(service.resolve()) == "1.0.0"
        assert file.call_count == 1
        assert env.call_count == 0
        assert git.await_count == 0

    def test_duplicates_attempted_once(self):
        options = VersionOptions(priority=["env", "file", "ENV", "file"])
        service, env, _, file = make_service(options)
        assert asyncio.run(service.resolve()) is None
        assert env.call_count == 1
        assert file.call_count == 1

    def test_sources_receive_their_options(self):
        options = VersionOptions(
            env=EnvOptions(name="MY_VERSION"),
            git=GitOptions(git_template="{hash}"),
            file=FileOptions(npm_package=False),
        )
        service, env, git, file = make_service(options)
        asyncio.run(service.resolve())
        env.assert_called_once_with(options.env)
        git.assert_awaited_once_with(options.git)
        file.assert_called_once_with(options.file)

    def test_unknown_entries_are_noops(self):
        options = VersionOptions(priority=["svn", "file"])
        service, env, git, file = make_service(options, file="1.0.0")
        assert asyncio.run(service.resolve()) == "1.0.0"
        assert env.call_count == 0
        assert git.await_count == 0

    def test_fallback_only_when_reached(self):
        options = VersionOptions(priority=["fallback", "env"], fallback="fall")
        service, env, _, _ = make_service(options, env="1.0.0")
        assert asyncio.run(service.resolve()) == "fall"
        assert env.call_count == 0

    def test_fallback_auto_appended(self):
        options = VersionOptions(priority=["env"], fallback="fall")
        service, *_ = make_service(options)
        assert asyncio.run(service.resolve()) == "fall"

    def test_fallback_entry_without_value(self):
        options = VersionOptions(priority=["fallback"])
        service, *_ = make_service(options)
        assert asyncio.run(service.resolve()) is None

    def test_empty_string_counts_as_found(self):
        options = VersionOptions(priority=["file", "env"])
        service, env, _, _ = make_service(options, env="1.0.0", file="")
        assert asyncio.run(service.resolve()) == ""
        assert env.call_count == 0

    def test_empty_priority(self, caplog):
        service, env, git, file = make_service(VersionOptions(priority=[]))
        with caplog.at_level("WARNING", logger="versioning.service"):
            assert asyncio.run(service.resolve()) is None
        assert "No priorities" in caplog.text
        assert env.call_count == 0 and file.call_count == 0 and git.await_count == 0

    def test_failing_source_is_not_fatal(self):
        options = VersionOptions(priority=["env", "file"])
        service, env, _, _ = make_service(options, file="1.0.0")
        env.side_effect = RuntimeError("boom")
        assert asyncio.run(service.resolve()) == "1.0.0"


class TestGetVersion:
    """End-to-end scenarios through the public entry points."""

    @pytest.fixture(autouse=True)
    def no_app_version(self, monkeypatch):
        monkeypatch.delenv("APP_VERSION", raising=False)

    def test_package_json_two_levels_up(self, tmp_path):
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        (tmp_path / "package.json").write_text(json.dumps({"version": "1.2.3"}))
        options = VersionOptions(
            priority=["env", "file", "fallback"], file=FileOptions(start_directory=str(start))
        )
        assert asyncio.run(get_version(options)) == "1.2.3"

    def test_additional_file_nested_prop(self, tmp_path):
        path = tmp_path / "f.json"
        path.write_text(json.dumps({"nested": {"version": "4.5.6"}}))
        options = {"priority": ["file"], "file": {"additionalFiles": [{"path": str(path), "prop": "nested.version"}]}}
        assert get_version_sync(options) == "4.5.6"

    def test_env_only_unset(self):
        assert get_version_sync({"priority": ["env"]}) is None

    def test_env_only_with_fallback(self):
        assert get_version_sync({"priority": ["env"], "fallback": "fall"}) == "fall"

    def test_env_value_trimmed(self, monkeypatch):
        monkeypatch.setenv("APP_VERSION", "test  ")
        assert get_version_sync() == "test"

    def test_non_string_fallback_is_stringified(self):
        assert get_version_sync(VersionOptions(priority=["env"], fallback=1)) == "1"

    def test_non_string_fallback_appended(self):
        assert normalize_priority(["env"], 0) == ["env", "fallback"]

    def test_invalid_options_mapping_returns_none(self, caplog):
        with caplog.at_level("ERROR", logger="versioning"):
            assert get_version_sync({"priority": 5}) is None
        assert "Invalid version options" in caplog.text
