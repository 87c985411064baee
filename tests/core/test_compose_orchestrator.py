import pytest
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock, patch

from monako.core.orchestrator import ComposeOrchestrator
from monako.infrastructure.error_handler import CloneError, GeneratorError
from monako.models import ComposeConfig, ComposeStatus, Origin

# --- Test Fixtures for Setup ---

@pytest.fixture
def config(tmp_path):
    """A config with two origins below a temporary target dir."""
    config = ComposeConfig(
        base_url="http://exampleurl.com",
        title="Test",
        file_whitelist=[".md"],
        origins=[
            Origin(url="https://example.com/one.git", target_dir="docs/one"),
            Origin(url="https://example.com/two.git", target_dir="docs/two"),
        ],
    )
    config.set_target_dir(tmp_path)
    return config


@pytest.fixture
def snapshots(tmp_path):
    """One fake repository snapshot per origin URL."""
    result = {}
    for name in ("one", "two"):
        repo = tmp_path / "snapshots" / name
        repo.mkdir(parents=True)
        (repo / f"{name}.md").write_text(f"# {name}\n")
        result[f"https://example.com/{name}.git"] = repo
    return result


@pytest.fixture
def mock_services(snapshots):
    """Creates mock objects for services used by the orchestrator."""
    git_service = MagicMock()

    @contextmanager
    def cloned(origin):
        origin.workspace = snapshots[origin.url]
        yield origin.workspace
        origin.workspace = None

    git_service.cloned.side_effect = cloned

    hugo_service = MagicMock()
    theme_service = MagicMock()
    theme_service.create_hugo_page.return_value = Path("config.monako.yaml")
    return git_service, hugo_service, theme_service


@pytest.fixture
def orchestrator(config, mock_services):
    git_service, hugo_service, theme_service = mock_services
    return ComposeOrchestrator(config, git_service, hugo_service, theme_service)

# --- Test Cases ---

class TestComposeOrchestrator:

    def test_compose_processes_origins_in_order(self, orchestrator, config, mock_services):
        git_service, _, _ = mock_services

        results = orchestrator.compose()

        assert [r.origin.url for r in results] == [o.url for o in config.origins]
        assert all(r.status == ComposeStatus.COMPLETED for r in results)
        assert (config.content_working_dir / "docs/one/one.md").is_file()
        assert (config.content_working_dir / "docs/two/two.md").is_file()
        assert git_service.cloned.call_count == 2
        assert orchestrator.statistics.composed_files == 2

    def test_run_executes_steps_in_order(self, orchestrator, config, mock_services):
        _, hugo_service, theme_service = mock_services
        calls = []
        hugo_service.new_site.side_effect = lambda *a: calls.append("new_site")
        theme_service.create_hugo_page.side_effect = lambda *a: calls.append("page") or Path("c.yaml")
        hugo_service.build.side_effect = lambda *a: calls.append("build")

        with patch.object(orchestrator, "compose", side_effect=lambda: calls.append("compose") or []):
            orchestrator.run("config.menu.md")

        assert calls == ["new_site", "page", "compose", "build"]
        hugo_service.new_site.assert_called_once_with(config.hugo_working_dir)
        hugo_service.build.assert_called_once_with(config.hugo_working_dir, Path("c.yaml"))

    def test_run_removes_previous_output(self, orchestrator, config):
        stale = config.content_working_dir / "stale.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        orchestrator.run("config.menu.md")

        assert not stale.exists()

    def test_generator_errors_ignored_without_fail_on_error(self, orchestrator, mock_services):
        _, hugo_service, _ = mock_services
        hugo_service.new_site.side_effect = GeneratorError("new site failed")
        hugo_service.build.side_effect = GeneratorError("build failed")

        with patch("monako.core.orchestrator.logger") as mock_logger:
            results = orchestrator.run("config.menu.md")

        assert len(results) == 2
        assert orchestrator.statistics.generator_errors == 2
        assert mock_logger.error.call_count == 2

    def test_generator_errors_fatal_with_fail_on_error(self, orchestrator, mock_services):
        _, hugo_service, _ = mock_services
        orchestrator.fail_on_error = True
        hugo_service.build.side_effect = GeneratorError("build failed")

        with pytest.raises(GeneratorError):
            orchestrator.run("config.menu.md")

    def test_clone_failure_aborts_run(self, orchestrator, mock_services):
        git_service, hugo_service, _ = mock_services
        git_service.cloned.side_effect = CloneError("clone failed")

        with pytest.raises(CloneError):
            orchestrator.run("config.menu.md")

        hugo_service.build.assert_not_called()
