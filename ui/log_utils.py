"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def target_host(url: str) -> str:
    """Return the host part of url, or the raw string if it has none."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return url
    return host or url


def write_request_log(
    url: str,
    status: int,
    *,
    rewritten: bool,
    message: str | None = None,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single proxied request log entry, grouped by target host."""
    payload: dict[str, Any] = {
        "timestamp": _utc_now(),
        "url": url,
        "status": status,
        "rewritten": rewritten,
    }
    if message:
        payload["message"] = message
    folder = log_root / "requests" / _safe_folder_name(target_host(url))
    return _write_json(folder, payload)


def write_cli_log(
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    CLI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with CLI_LOG_FILE.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> int:
    """Delete per-request logs left over from a previous run."""
    folder = log_root / "requests"
    if not folder.exists():
        return 0

    deleted = 0
    for old_file in folder.glob("*/*.json"):
        try:
            old_file.unlink()
            deleted += 1
        except OSError:
            pass
    return deleted


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _safe_folder_name(host: str) -> str:
    cleaned = "".join(c if c.isalnum() or c in ".-" else "_" for c in host)
    return cleaned.strip(".") or "unknown"


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
