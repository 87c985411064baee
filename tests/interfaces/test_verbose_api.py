"""
Unit tests for the DocsComposer API.
"""

import logging
from unittest.mock import patch

import pytest

from monako.infrastructure.error_handler import GeneratorError
from monako.interfaces.api import DocsComposer
from monako.models import CommandLineSettings, ComposeConfig, Origin


@pytest.fixture
def config(tmp_path):
    config = ComposeConfig(
        base_url="http://exampleurl.com",
        origins=[Origin(url="https://example.com/repo.git")],
    )
    config.set_target_dir(tmp_path)
    return config


@pytest.fixture
def shim():
    with patch("monako.interfaces.api.AsciidoctorShim") as mock_shim:
        mock_shim.return_value.environment.return_value = {"PATH": "/tmp/shim:/usr/bin"}
        yield mock_shim


class TestVerboseLogging:
    """Test cases for verbose logging functionality."""

    def test_default_follows_trace_setting(self, config, shim):
        composer = DocsComposer(CommandLineSettings(), config=config)
        assert composer.verbose is False

        composer = DocsComposer(CommandLineSettings(trace=True), config=config)
        assert composer.verbose is True

    @patch("monako.interfaces.api.logger")
    def test_logger_level_verbose_true(self, mock_logger, config, shim):
        DocsComposer(CommandLineSettings(), config=config, verbose=True)
        mock_logger.setLevel.assert_called_with(logging.DEBUG)

    @patch("monako.interfaces.api.logger")
    def test_set_verbose_method_disable(self, mock_logger, config, shim):
        composer = DocsComposer(CommandLineSettings(), config=config, verbose=True)
        composer.set_verbose(False)

        assert composer.verbose is False
        assert mock_logger.setLevel.call_count >= 2
        mock_logger.setLevel.assert_called_with(logging.INFO)


class TestWiring:

    def test_shim_environment_is_given_to_hugo(self, config, shim):
        composer = DocsComposer(CommandLineSettings(), config=config, hugo_binary="/opt/hugo")

        shim.assert_called_once_with("http://exampleurl.com", config.hugo_working_dir)
        shim.return_value.install.assert_called_once()
        assert composer.hugo_service.binary == "/opt/hugo"
        assert composer.hugo_service.env == {"PATH": "/tmp/shim:/usr/bin"}

    def test_no_shim_on_windows(self, config, shim, monkeypatch):
        monkeypatch.setattr("monako.interfaces.api.sys.platform", "win32")

        composer = DocsComposer(CommandLineSettings(), config=config)

        shim.assert_not_called()
        assert composer.hugo_service.env is None

    def test_fail_on_error_reaches_orchestrator(self, config, shim):
        composer = DocsComposer(CommandLineSettings(fail_on_error=True), config=config)
        assert composer.orchestrator.fail_on_error is True

    def test_run_uses_menu_file(self, config, shim):
        settings = CommandLineSettings(menu_config_file_path="menu.md")
        composer = DocsComposer(settings, config=config)

        with patch.object(composer.orchestrator, "run", return_value=[]) as mock_run:
            assert composer.run() == []

        mock_run.assert_called_once_with("menu.md")

    def test_run_closes_theme_service(self, config, shim):
        composer = DocsComposer(CommandLineSettings(), config=config)

        with patch.object(composer.orchestrator, "run", return_value=[]), \
                patch.object(composer.theme_service, "close") as mock_close:
            composer.run()

        mock_close.assert_called_once()

    def test_run_closes_theme_service_on_failure(self, config, shim):
        composer = DocsComposer(CommandLineSettings(), config=config)

        with patch.object(composer.orchestrator, "run", side_effect=GeneratorError("boom")), \
                patch.object(composer.theme_service, "close") as mock_close:
            with pytest.raises(GeneratorError):
                composer.run()

        mock_close.assert_called_once()
