"""Tests for settings and the server runner."""

import pytest

import run_server
from taskboard.core.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    monkeypatch.delenv("SERVE_FRONTEND", raising=False)
    settings = Settings(_env_file=None)

    assert settings.API_PREFIX == "/api"
    assert settings.CORS_ORIGINS == ["*"]
    assert settings.SERVE_FRONTEND is False
    assert settings.FRONTEND_ROUTE == "/app"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("cors_origins", '["https://tasks.example.com"]')
    monkeypatch.setenv("SERVE_FRONTEND", "true")
    settings = Settings(_env_file=None)

    assert settings.CORS_ORIGINS == ["https://tasks.example.com"]
    assert settings.SERVE_FRONTEND is True


def test_build_command_defaults_to_reload(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    args = run_server.build_parser().parse_args([])

    cmd = run_server.build_command(args)

    assert cmd[:2] == ["uvicorn", "taskboard.main:app"]
    assert cmd[cmd.index("--host") + 1] == "127.0.0.1"
    assert cmd[cmd.index("--port") + 1] == "8000"
    assert "--reload" in cmd


def test_build_command_with_workers_disables_reload() -> None:
    args = run_server.build_parser().parse_args(["--workers", "4", "--port", "9000"])

    cmd = run_server.build_command(args)

    assert "--reload" not in cmd
    assert cmd[cmd.index("--workers") + 1] == "4"
    assert cmd[cmd.index("--port") + 1] == "9000"


def test_main_reports_missing_dependencies(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run_server, "check_dependencies", lambda: (False, ["uvicorn"]))

    assert run_server.main(["--no-reload"]) == 1


def test_check_dependencies_lists_missing_modules(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(run_server.REQUIRED_MODULES, "not_a_real_module_xyz", "pip install nothing")

    ok, missing = run_server.check_dependencies()

    assert ok is False
    assert missing == ["not_a_real_module_xyz (install with: pip install nothing)"]


def test_main_returns_uvicorn_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    class Completed:
        returncode = 3

    def fake_run(cmd, check):
        calls.append(cmd)
        return Completed()

    monkeypatch.setattr(run_server, "check_dependencies", lambda: (True, []))
    monkeypatch.setattr(run_server.subprocess, "run", fake_run)

    assert run_server.main(["--no-reload", "--port", "8123"]) == 3
    assert calls[0][:2] == ["uvicorn", "taskboard.main:app"]
    assert "--reload" not in calls[0]
