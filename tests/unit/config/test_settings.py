# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from actcache.config.settings import ConfigurationError, Settings, load_settings
from actcache.constants import DEFAULT_UPLOAD_CHUNK_SIZE


class TestSettingsDefaults:
    def test_defaults(self, monkeypatch):
        for var in ("GITHUB_REF", "GITHUB_EVENT_NAME", "GITHUB_SERVER_URL", "CACHE_BACKEND"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.cache_backend == "local"
        assert s.github_server_url == "https://github.com"
        assert s.github_ref == ""
        assert s.upload_chunk_size_default == DEFAULT_UPLOAD_CHUNK_SIZE
        assert s.log_format == "text"


class TestSettingsEnvironment:
    def test_reads_runner_variables(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
        monkeypatch.setenv("GITHUB_REF", "refs/pull/7/merge")
        monkeypatch.setenv("GITHUB_RUN_ID", "998")
        monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "out"))
        s = Settings(_env_file=None)
        assert s.github_event_name == "pull_request"
        assert s.github_ref == "refs/pull/7/merge"
        assert s.github_run_id == "998"
        assert s.github_output == tmp_path / "out"

    def test_env_file(self, tmp_path: Path):
        env = tmp_path / ".env"
        env.write_text("CACHE_ROOT=/var/cache/ci\nLOG_FORMAT=json\n")
        s = Settings(_env_file=str(env))
        assert s.cache_root == Path("/var/cache/ci")
        assert s.log_format == "json"


class TestSettingsValidation:
    def test_s3_requires_bucket(self):
        with pytest.raises(ConfigurationError, match="CACHE_S3_BUCKET"):
            Settings(_env_file=None, cache_backend="s3")

    def test_s3_with_bucket(self):
        s = Settings(_env_file=None, cache_backend="s3", cache_s3_bucket="ci")
        assert s.cache_s3_bucket == "ci"

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="gcs")

    def test_chunk_size_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, upload_chunk_size_default=0)

    def test_load_settings_overrides(self):
        s = load_settings(_env_file=None, github_run_id="override")
        assert s.github_run_id == "override"
