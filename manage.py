#!/usr/bin/env python3
"""
OrderDesk management CLI.

Usage:
    python manage.py migrate     Apply pending database migrations
    python manage.py start       Migrate & start server in the background
    python manage.py stop        Graceful shutdown
    python manage.py dev         Backend with auto-reload (foreground)
    python manage.py status      Check if server is running
"""

import argparse
import asyncio
import os
import platform
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".orderdesk.pid"

IS_WINDOWS = platform.system() == "Windows"


def _read_pid() -> int | None:
    """Read PID from .orderdesk.pid, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    # Stale PID file
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    """Check if a process with the given PID is running."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
            return str(pid) in result.stdout
        except OSError:
            return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _kill_pid(pid: int) -> bool:
    """Send termination signal to a process. Returns True if successful."""
    try:
        if IS_WINDOWS:
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
        else:
            os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _is_port_free(port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def migrate(db_path: str | None = None) -> bool:
    """Apply pending migrations. Returns False if one of them failed."""
    sys.path.insert(0, str(ROOT_DIR))
    from src.infrastructure.storage.sqlite.migrations import run_migrations

    results = asyncio.run(run_migrations(Path(db_path) if db_path else None))
    if not results:
        print("Database is up to date.")
        return True

    for result in results:
        state = "ok" if result.success else f"FAILED ({result.error})"
        print(f"  v{result.version} {result.name}: {state} [{result.execution_time_ms}ms]")
    return all(r.success for r in results)


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations only."""
    if not migrate(args.db):
        sys.exit(1)


def _uvicorn_cmd(host: str, port: int, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Migrate and start the server."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        print(f"Error: Port {args.port} is in use.")
        sys.exit(1)

    if not migrate():
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    if IS_WINDOWS:
        proc = subprocess.Popen(
            _uvicorn_cmd(args.host, args.port),
            cwd=str(ROOT_DIR),
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
        )
    else:
        proc = subprocess.Popen(_uvicorn_cmd(args.host, args.port), cwd=str(ROOT_DIR))

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}/api")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid):
        for _ in range(30):
            if not _is_pid_alive(pid):
                break
            time.sleep(0.1)
        else:
            print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    if not _is_pid_alive(pid):
        print("Server stopped.")
    else:
        print("Warning: Server may still be running.")


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the backend in the foreground with --reload."""
    if not migrate():
        sys.exit(1)
    print(f"Starting backend on {args.host}:{args.port} (reload mode)...")
    try:
        subprocess.run(_uvicorn_cmd(args.host, args.port, reload=True), cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        print("\nDev server stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(args.port):
        print(f"No PID file, but port {args.port} is in use.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="OrderDesk management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_migrate.set_defaults(func=cmd_migrate)

    # start
    p_start = sub.add_parser("start", help="Migrate and start server")
    p_start.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_start.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_start.set_defaults(func=cmd_start)

    # stop
    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    # dev
    p_dev = sub.add_parser("dev", help="Start backend with auto-reload")
    p_dev.add_argument("--host", default="127.0.0.1", help="Backend host (default: 127.0.0.1)")
    p_dev.add_argument("--port", type=int, default=8000, help="Backend port (default: 8000)")
    p_dev.set_defaults(func=cmd_dev)

    # status
    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
