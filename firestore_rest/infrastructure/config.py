from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Dict, Optional

PRODUCTION_SERVER = "https://firestore.googleapis.com/v1/"
LOCAL_SERVER = "http://localhost:8080/v1/"


def parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def env_get(key: str) -> Optional[str]:
    """Get environment value from process env, falling back to .env in CWD."""
    v = os.getenv(key)
    if v is not None and v.strip():
        return v.strip()
    local = parse_dotenv(Path(".env"))
    v2 = local.get(key)
    return v2.strip() if v2 is not None and v2.strip() else None


def env_str(name: str, default: str) -> str:
    return env_get(name) or default


def project_id() -> str:
    return env_str("FIRESTORE_PROJECT_ID", "vocab-u-study")


def database_id() -> str:
    return env_str("FIRESTORE_DATABASE", "(default)")


def project_prefix() -> str:
    """Resource prefix shared by every document path in the database."""
    return f"projects/{project_id()}/databases/{database_id()}/documents"


def db_server() -> str:
    """
    Select the service root for the running context.

    FIRESTORE_EMULATOR_HOST (host:port) targets a local emulator; FIRESTORE_ENV=local
    targets the default local port. Anything else uses production.
    """
    emulator = env_get("FIRESTORE_EMULATOR_HOST")
    if emulator:
        host = emulator.rstrip("/")
        if not host.startswith(("http://", "https://")):
            host = f"http://{host}"
        return f"{host}/v1/"
    if env_str("FIRESTORE_ENV", "production").lower() == "local":
        return LOCAL_SERVER
    return PRODUCTION_SERVER


def base_url() -> str:
    return db_server() + project_prefix()


def log_level() -> str:
    return env_str("FS_LOG_LEVEL", "INFO").upper()
