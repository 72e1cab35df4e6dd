#!/usr/bin/env python3
"""
Taskboard Server Runner

Launch uvicorn serving ``taskboard.main:app``.

Usage:
    python run_server.py                    # Dev server with hot-reload
    python run_server.py --no-reload        # Single process, no reload
    python run_server.py --workers 4        # Production, 4 processes
    HOST=0.0.0.0 PORT=8080 python run_server.py

Tasks live in process memory: with --workers N every worker holds its own
independent set of tasks.
"""

import argparse
import importlib.util
import os
import subprocess
import sys

APP_PATH = "taskboard.main:app"

# module name -> install hint
REQUIRED_MODULES = {
    "taskboard": "pip install -e .",
    "uvicorn": "pip install uvicorn[standard]",
}

_COLORS = {"ok": "\033[0;32m", "warn": "\033[1;33m", "error": "\033[0;31m"}
_RESET = "\033[0m"


def _status(kind: str, message: str) -> None:
    print(f"{_COLORS[kind]}{message}{_RESET}")


def check_dependencies() -> tuple[bool, list[str]]:
    """Return whether every required module is importable, plus the missing ones."""
    missing = [
        f"{name} (install with: {hint})"
        for name, hint in REQUIRED_MODULES.items()
        if importlib.util.find_spec(name) is None
    ]
    return not missing, missing


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve the Taskboard API with uvicorn",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="HOST, PORT and LOG_LEVEL environment variables set the defaults.",
    )
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"), help="Bind address")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Bind port")
    parser.add_argument("--no-reload", action="store_true", help="Do not watch files for changes")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "info"),
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="uvicorn log level",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes; implies --no-reload, each worker has its own tasks",
    )
    return parser


def build_command(args: argparse.Namespace) -> list[str]:
    """Build the uvicorn command line for the parsed arguments."""
    cmd = ["uvicorn", APP_PATH, "--host", args.host, "--port", str(args.port)]
    cmd += ["--log-level", args.log_level]

    if args.workers is not None:
        cmd += ["--workers", str(args.workers)]
    elif not args.no_reload:
        cmd.append("--reload")
    return cmd


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    deps_ok, missing = check_dependencies()
    if not deps_ok:
        _status("error", "Missing required dependencies:")
        print("\n".join(f"  - {dep}" for dep in missing))
        return 1

    cmd = build_command(args)
    if args.workers is not None and not args.no_reload:
        _status("warn", "--workers given, hot-reload is off")

    mode = "dev (hot-reload)" if "--reload" in cmd else "production"
    _status("ok", f"Taskboard on http://{args.host}:{args.port} [{mode}, log level {args.log_level}]")
    if args.workers:
        print(f"{args.workers} workers, tasks are not shared between them")

    try:
        return subprocess.run(cmd, check=False).returncode
    except KeyboardInterrupt:
        _status("warn", "Server stopped")
        return 0
    except OSError as e:
        _status("error", f"Could not start uvicorn: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
