from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from strmarr.domain.types import RunReport
from strmarr.ui import cli as cli_module


def test_missing_configuration_exits_before_any_run(
    playarr_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("PLAYARR_API_KEY")
    monkeypatch.setattr(cli_module, "load_dotenv", lambda *_args, **_kwargs: False)

    def fail_sync(*_: object, **__: object) -> RunReport:
        raise AssertionError("sync must not run")

    monkeypatch.setattr(cli_module, "sync_pointer_files", fail_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync"])

    assert excinfo.value.code == 1


def test_sync_command_runs_once(playarr_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "load_dotenv", lambda *_args, **_kwargs: False)
    captured: list[object] = []

    def fake_sync(config: object) -> RunReport:
        captured.append(config)
        return RunReport(started_at=datetime(2026, 1, 1, tzinfo=UTC))

    monkeypatch.setattr(cli_module, "sync_pointer_files", fake_sync)

    cli_module.main(["sync"])

    assert len(captured) == 1
    assert playarr_env.is_dir()


def test_incomplete_sync_exits_non_zero(
    playarr_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(cli_module, "load_dotenv", lambda *_args, **_kwargs: False)

    def fake_sync(_config: object) -> RunReport:
        return RunReport(started_at=datetime(2026, 1, 1, tzinfo=UTC), completed=False)

    monkeypatch.setattr(cli_module, "sync_pointer_files", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync"])

    assert excinfo.value.code == 1


def test_serve_is_the_default_command(
    playarr_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(cli_module, "load_dotenv", lambda *_args, **_kwargs: False)
    served: list[object] = []
    monkeypatch.setattr(cli_module, "_serve", served.append)

    cli_module.main([])

    assert len(served) == 1


def test_invalid_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--log-level", "LOUD"])

    assert excinfo.value.code == 2
