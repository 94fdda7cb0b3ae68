"""Tests for configuration validation."""

import os
import pytest
from unittest.mock import patch

from matching_engine.config.config import REQUIRED_VARS, validate_config


def _env_without_config_vars():
    return {
        k: v for k, v in os.environ.items()
        if k not in ("SUPABASE_URL", "SUPABASE_KEY", "OPENAI_API_KEY",
                     "SCORING_CONFIG_PATH", "LOG_LEVEL", "ENVIRONMENT", "EMBEDDING_MODEL")
    }


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so a developer's .env is never read."""
    monkeypatch.chdir(tmp_path)


class TestConfigValidation:
    """Test startup config validation."""

    VALID_ENV = {
        "SUPABASE_URL": "https://test.supabase.co",
        "SUPABASE_KEY": "test-key-123",
        "OPENAI_API_KEY": "sk-test",
        "SCORING_CONFIG_PATH": "scoring.yaml",
        "LOG_LEVEL": "DEBUG",
    }

    def test_valid_config_loads_successfully(self):
        env = _env_without_config_vars()
        env.update(self.VALID_ENV)
        with patch.dict(os.environ, env, clear=True):
            config = validate_config()

        assert config.supabase_url == "https://test.supabase.co"
        assert config.supabase_key == "test-key-123"
        assert config.openai_api_key == "sk-test"
        assert config.scoring_config_path == "scoring.yaml"
        assert config.log_level == "DEBUG"

    def test_defaults_for_optional_vars(self):
        env = _env_without_config_vars()
        env.update({"SUPABASE_URL": "https://test.supabase.co", "SUPABASE_KEY": "k"})
        with patch.dict(os.environ, env, clear=True):
            config = validate_config()

        assert config.openai_api_key is None
        assert config.environment == "production"
        assert config.embedding_model == "text-embedding-ada-002"
        assert config.scoring_config_path is None
        assert config.log_level == "INFO"

    def test_missing_required_vars_listed_together(self):
        with patch.dict(os.environ, _env_without_config_vars(), clear=True):
            with pytest.raises(ValueError) as exc_info:
                validate_config()

        message = str(exc_info.value)
        for var in REQUIRED_VARS:
            assert var in message

    def test_case_insensitive_env(self):
        env = _env_without_config_vars()
        env.update({"supabase_url": "https://lower.supabase.co", "supabase_key": "k"})
        with patch.dict(os.environ, env, clear=True):
            config = validate_config()
        assert config.supabase_url == "https://lower.supabase.co"

    def test_env_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("SUPABASE_URL=https://file.supabase.co\nSUPABASE_KEY=file-key\n")
        with patch.dict(os.environ, _env_without_config_vars(), clear=True):
            config = validate_config()
        assert config.supabase_url == "https://file.supabase.co"
