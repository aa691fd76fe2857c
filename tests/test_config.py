"""Unit tests for configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from kube_sections.config import LogLevel, SectionsConfig


class TestSectionsConfig:
    """Tests for SectionsConfig."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("LOG_LEVEL", "KUBECONFIG_PATH", "REQUEST_TIMEOUT", "LOAD_ENTRYPOINT_PLUGINS"):
            monkeypatch.delenv(f"KUBE_SECTIONS_{name}", raising=False)

        config = SectionsConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.log_level == LogLevel.INFO
        assert config.kubeconfig_path is None
        assert config.request_timeout == 30.0
        assert config.load_entrypoint_plugins is True

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify settings are read from KUBE_SECTIONS_ variables."""
        monkeypatch.setenv("KUBE_SECTIONS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("KUBE_SECTIONS_KUBECONFIG_PATH", "/tmp/kubeconfig")
        monkeypatch.setenv("KUBE_SECTIONS_KUBECONFIG_CONTEXT", "staging")
        monkeypatch.setenv("KUBE_SECTIONS_REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("KUBE_SECTIONS_LOAD_ENTRYPOINT_PLUGINS", "false")

        config = SectionsConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.log_level == LogLevel.DEBUG
        assert config.kubeconfig_path == Path("/tmp/kubeconfig")
        assert config.kubeconfig_context == "staging"
        assert config.request_timeout == 5.0
        assert config.load_entrypoint_plugins is False

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SectionsConfig(request_timeout=0)

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            SectionsConfig(log_level="VERBOSE")  # type: ignore[arg-type]
