"""Shared logging utilities."""

import json
import shutil
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "relay.log"

# Single writer thread keeps file I/O off the event loop and ordered
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="relay-log")
_timezone: tzinfo = UTC


def set_log_timezone(tz: tzinfo) -> None:
    """Render log timestamps in the given timezone."""
    global _timezone
    _timezone = tz


def describe_request(descriptor: dict[str, Any]) -> str:
    """One-line summary of a descriptor: METHOD url [via proxy]."""
    method = str(descriptor.get("method", "?")).upper()
    line = f"{method} {descriptor.get('url', '')}"
    proxy = descriptor.get("proxy")
    if isinstance(proxy, dict) and proxy.get("host"):
        line += f" via {proxy.get('type', '?')}://{proxy['host']}"
        if proxy.get("port"):
            line += f":{proxy['port']}"
    return line


def write_incoming_log(
    method: str,
    path: str,
    headers: dict[str, str],
    body: Any,
    *,
    log_root: Path | None = None,
) -> Path:
    """Write a single incoming request log entry."""
    log_root = log_root or LOG_ROOT
    payload = {
        "timestamp": _now().isoformat(),
        "method": method,
        "path": path,
        "headers": _redact_headers(headers),
        "body": redact_descriptor(body),
    }
    return _write_json(log_root / "incoming", payload)


def submit_incoming_log(
    method: str,
    path: str,
    headers: dict[str, str],
    body: Any,
    *,
    log_root: Path | None = None,
) -> None:
    """Queue write_incoming_log on the log writer thread."""
    _executor.submit(write_incoming_log, method, path, headers, body, log_root=log_root or LOG_ROOT)


def redact_descriptor(body: Any) -> Any:
    """Mask credentials inside a descriptor's headers and proxy."""
    if not isinstance(body, dict):
        return body
    redacted = dict(body)
    if isinstance(body.get("headers"), dict):
        redacted["headers"] = _redact_headers(body["headers"])
    proxy = body.get("proxy")
    if isinstance(proxy, dict) and proxy.get("password"):
        redacted["proxy"] = {**proxy, "password": "***"}
    return redacted


def write_cli_log(
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    _executor.submit(_append_cli_line, CLI_LOG_FILE, _format_line(level, message, extra))


def clear_logs(log_root: Path | None = None) -> None:
    """Remove logs left over from a previous run."""
    log_root = log_root or LOG_ROOT
    if log_root.exists():
        shutil.rmtree(log_root, ignore_errors=True)


def flush_logs() -> None:
    """Block until every queued log write has completed."""
    _executor.submit(lambda: None).result()


def shutdown_log_executor() -> None:
    """Flush pending log writes and stop the writer thread."""
    _executor.shutdown(wait=True)


def _format_line(level: str, message: str, extra: dict[str, Any]) -> str:
    timestamp = _now().strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    return line + "\n"


def _append_cli_line(log_file: Path, line: str) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with log_file.open("a") as f:
        f.write(line)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        lowered = key.lower()
        if "key" in lowered or "authorization" in lowered or "cookie" in lowered:
            redacted[key] = _mask(str(value))
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _now() -> datetime:
    return datetime.now(_timezone)
