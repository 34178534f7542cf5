"""Application entry point for the Wayfinder API.

Run locally:
    uvicorn wayfinder.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import uvicorn

from wayfinder.api import create_app


ENV_FILES = (Path("wayfinder/.env"), Path(".env"))


def _read_env_file(path: Path) -> dict[str, str]:
    """Parse `KEY=value` lines, allowing comments, `export` prefixes and quoted values."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def _load_local_env(paths: tuple[Path, ...] = ENV_FILES) -> None:
    """Seed unset environment variables from local .env files.

    Real environment variables always win; earlier files win over later ones.
    """
    for env_path in paths:
        if env_path.is_file():
            for key, value in _read_env_file(env_path).items():
                os.environ.setdefault(key, value)


def _configure_logging() -> None:
    level_name = os.getenv("WAYFINDER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


_load_local_env()
_configure_logging()
app = create_app()


if __name__ == "__main__":
    host = os.getenv("WAYFINDER_API_HOST", "0.0.0.0")
    port = int(os.getenv("WAYFINDER_API_PORT", "8000"))
    reload_enabled = os.getenv("WAYFINDER_API_RELOAD", "true").lower() == "true"
    uvicorn.run("wayfinder.main:app", host=host, port=port, reload=reload_enabled)
