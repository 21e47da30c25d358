#!/usr/bin/env python3
"""
Tarefas Server Runner

Start the FastAPI server with configurable options.

Usage:
    python -m tarefas.server.run_server                 # Start with defaults
    python -m tarefas.server.run_server --no-reload     # Start without hot-reload
    python -m tarefas.server.run_server --port 8080     # Start on custom port
    python -m tarefas.server.run_server --store redis   # Use the Redis backend

The file and memory stores live inside one process, so they run with a
single worker; use --store redis for --workers above 1.
"""

import argparse
import logging
import os
import subprocess
import sys

from tarefas.core.config import get_settings

logger = logging.getLogger(__name__)

# Stores whose locking and counters only hold within one process.
SINGLE_PROCESS_BACKENDS = ("file", "memory")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def build_command(args: argparse.Namespace) -> list[str]:
    """uvicorn command line for ``args``."""
    cmd = [
        "uvicorn",
        "tarefas.server.main:app",
        "--host", args.host,
        "--port", str(args.port),
        "--log-level", args.log_level,
    ]
    if not args.no_reload and args.workers is None:
        cmd.append("--reload")
    if args.workers is not None:
        cmd.extend(["--workers", str(args.workers)])
    return cmd


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Start the Tarefas FastAPI server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "127.0.0.1"),
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable hot-reload (enabled by default in dev)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "info"),
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Logging level (default: info)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (production only)",
    )
    parser.add_argument(
        "--store",
        choices=["file", "redis", "memory"],
        default=None,
        help="Override TAREFAS_STORE_BACKEND for this run",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the server with specified configuration."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.log_level == "trace" else args.log_level)

    env = dict(os.environ)
    if args.store:
        env["TAREFAS_STORE_BACKEND"] = args.store

    backend = args.store or get_settings().STORE_BACKEND
    if args.workers is not None and args.workers > 1 and backend in SINGLE_PROCESS_BACKENDS:
        logger.error("The %s store cannot be shared by %d workers; use --store redis", backend, args.workers)
        return 2

    cmd = build_command(args)
    if args.workers is not None and not args.no_reload:
        logger.warning("--workers specified, disabling hot-reload")

    logger.info("Host: %s", args.host)
    logger.info("Port: %d", args.port)
    logger.info("Hot-reload: %s", "--reload" in cmd)
    logger.info("Store backend: %s", env.get("TAREFAS_STORE_BACKEND", "from settings"))
    logger.info("Starting Tarefas Server...")

    try:
        subprocess.run(cmd, check=True, env=env)
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with code %d", e.returncode)
        return e.returncode
    except FileNotFoundError:
        logger.error("uvicorn executable not found (install with: pip install 'uvicorn[standard]')")
        return 1


if __name__ == "__main__":
    sys.exit(main())
