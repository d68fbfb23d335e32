"""Unit tests for the command line entry point."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from application import cli
from application.pipeline import MigrationReport
from domain.exceptions import OutputWriteError


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    for name in ("LOJ_START_ID", "LOJ_END_ID", "LOJ_TOKEN", "LOJ_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    return str(tmp_path / "none.env")


def test_run_passes_cli_overrides(env_file, tmp_path):
    report = MigrationReport(yaml_path=tmp_path / "out" / "problems_version_1.0.yaml")
    main = AsyncMock(return_value=report)

    with patch.object(cli, "main", main):
        code = cli.run(
            ["--start", "3", "--end", "4", "--output", str(tmp_path / "out"),
             "--token", "abc", "--env-file", env_file]
        )

    assert code == 0
    settings = main.call_args.args[0]
    assert (settings.start_id, settings.end_id) == (3, 4)
    assert settings.output_dir == Path(tmp_path / "out")
    assert settings.token == "abc"
    assert settings.archive is False


def test_run_reports_fatal_write_error(env_file):
    with patch.object(cli, "main", AsyncMock(side_effect=OutputWriteError("disk full"))):
        assert cli.run(["--start", "1", "--end", "1", "--env-file", env_file]) == 1


def test_run_rejects_inverted_range(env_file):
    with patch.object(cli, "main", AsyncMock()) as main:
        assert cli.run(["--start", "5", "--end", "1", "--env-file", env_file]) == 2
    main.assert_not_called()
