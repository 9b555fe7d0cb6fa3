"""Tests for the top-level package and the command line interface."""
from click.testing import CliRunner

import prreviewer
from prreviewer import (
    Database,
    ErrorCode,
    PullRequestService,
    ReviewerSelector,
    ReviewerServiceConfig,
    ServiceError,
    StatsService,
    TeamService,
    UserService,
    get_db,
    init_db,
)
from prreviewer.__main__ import cli


def test_public_api_import_from_top_level():
    """Test that the public API can be imported from the package."""
    assert Database is not None
    assert get_db is not None
    assert init_db is not None
    assert ReviewerSelector is not None
    assert ReviewerServiceConfig is not None
    assert issubclass(ServiceError, Exception)
    assert ErrorCode.NO_CANDIDATE.value == "NO_CANDIDATE"
    for service in (TeamService, UserService, PullRequestService, StatsService):
        assert service is not None


def test_version():
    assert prreviewer.__version__ == "0.1.0"


def test_cli_init_writes_config(tmp_path):
    config_path = tmp_path / "prreviewer.yaml"

    result = CliRunner().invoke(cli, ["init", "-c", str(config_path)])

    assert result.exit_code == 0
    assert config_path.exists()
    assert ReviewerServiceConfig.from_yaml(config_path).api_port == 8080


def test_cli_init_refuses_to_overwrite(tmp_path):
    config_path = tmp_path / "prreviewer.yaml"
    config_path.write_text("api_port: 9000\n")

    result = CliRunner().invoke(cli, ["init", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "already exists" in result.output
    assert config_path.read_text() == "api_port: 9000\n"


def test_cli_status_reports_counts(tmp_path, monkeypatch):
    monkeypatch.setattr("prreviewer.core.config.settings._config", None)
    monkeypatch.setattr("prreviewer.core.storage.database._db", None)
    config_path = tmp_path / "prreviewer.yaml"
    ReviewerServiceConfig(db_path=str(tmp_path / "reviews.db")).to_yaml(config_path)

    result = CliRunner().invoke(cli, ["status", "-c", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "Teams: 0, users: 0, pull requests: 0, assignments: 0" in result.output
