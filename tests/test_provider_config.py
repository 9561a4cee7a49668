"""Tests for provider configuration helpers.

Covers:
  - API key resolution (environment override, key file)
  - Boolean switch parsing
  - Import-time settings read from the environment
"""

import importlib

import pytest

from posecoach.llm import provider_config
from posecoach.llm.provider_config import _env_flag, load_key


@pytest.fixture
def reload_config(monkeypatch):
    """Re-resolve module settings; restores the original values afterwards."""
    yield lambda: importlib.reload(provider_config)
    monkeypatch.undo()
    importlib.reload(provider_config)


# ============================================================================
# Test: API key lookup
# ============================================================================

class TestLoadKey:

    def test_none_path(self):
        assert load_key(None) is None

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        key_file = tmp_path / "gemini.key"
        key_file.write_text("from-file\n")
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")

        assert load_key(str(key_file)) == "from-env"

    def test_reads_file(self, tmp_path, monkeypatch):
        key_file = tmp_path / "gemini.key"
        key_file.write_text("  from-file\n")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        assert load_key(str(key_file)) == "from-file"

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        assert load_key(str(tmp_path / "gemini.key")) is None

    def test_empty_file(self, tmp_path, monkeypatch):
        key_file = tmp_path / "gemini.key"
        key_file.write_text("\n")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        assert load_key(str(key_file)) is None


# ============================================================================
# Test: Boolean switches
# ============================================================================

class TestEnvFlag:

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " On "])
    def test_truthy_values(self, monkeypatch, raw):
        monkeypatch.setenv("POSECOACH_TEST_FLAG", raw)

        assert _env_flag("POSECOACH_TEST_FLAG", False) is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off", ""])
    def test_falsy_values(self, monkeypatch, raw):
        monkeypatch.setenv("POSECOACH_TEST_FLAG", raw)

        assert _env_flag("POSECOACH_TEST_FLAG", True) is False

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("POSECOACH_TEST_FLAG", raising=False)

        assert _env_flag("POSECOACH_TEST_FLAG", True) is True
        assert _env_flag("POSECOACH_TEST_FLAG", False) is False


# ============================================================================
# Test: Environment settings
# ============================================================================

class TestEnvironmentSettings:

    def test_validation_disabled(self, monkeypatch, reload_config):
        monkeypatch.setenv("VALIDATE_RESPONSES", "false")

        assert reload_config().VALIDATE_RESPONSES is False

    def test_validation_enabled_when_unset(self, monkeypatch, reload_config):
        monkeypatch.delenv("VALIDATE_RESPONSES", raising=False)

        assert reload_config().VALIDATE_RESPONSES is True

    def test_timeout_override(self, monkeypatch, reload_config):
        monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "30")

        assert reload_config().REQUEST_TIMEOUT == 30.0

    def test_timeout_default(self, monkeypatch, reload_config):
        monkeypatch.delenv("GEMINI_TIMEOUT_SECONDS", raising=False)

        assert reload_config().REQUEST_TIMEOUT == 120.0

    def test_model_overrides(self, monkeypatch, reload_config):
        monkeypatch.setenv("GEMINI_MODEL_NAME", "gemini-test-text")
        monkeypatch.setenv("GEMINI_IMAGE_MODEL_NAME", "gemini-test-image")

        config = reload_config()

        assert config.ANALYSIS_MODEL_NAME == "gemini-test-text"
        assert config.IMAGE_MODEL_NAME == "gemini-test-image"

    def test_model_defaults(self, monkeypatch, reload_config):
        monkeypatch.delenv("GEMINI_MODEL_NAME", raising=False)
        monkeypatch.delenv("GEMINI_IMAGE_MODEL_NAME", raising=False)

        config = reload_config()

        assert config.ANALYSIS_MODEL_NAME == "gemini-2.5-flash"
        assert config.IMAGE_MODEL_NAME == "gemini-2.5-flash-image"
