"""JSON-lines run telemetry for the command-line entry point."""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .schema import SleepRecord, ValidationResult

TELEMETRY_FILE = "telemetry.jsonl"


def record_metadata(record: SleepRecord, verdict: Optional[ValidationResult] = None) -> Dict[str, Any]:
    """Summarise a calculation for the telemetry log without storing wall-clock inputs."""
    payload: Dict[str, Any] = {
        "timezone": record.timezone,
        "total_minutes": record.total_minutes,
    }
    if verdict is not None:
        payload["status"] = verdict.status.value
        payload["total_hours"] = verdict.total_hours
    return payload


def log_run(
    event: str,
    *,
    start_time: float,
    output_dir: Path | str,
    status: str = "success",
    error: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    """Append one telemetry entry to ``output_dir/telemetry.jsonl`` and return its path."""

    payload: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "duration_ms": int((time.time() - start_time) * 1000),
        "status": status,
    }
    if metadata:
        payload["metadata"] = metadata
    if error:
        payload["error"] = error

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    target = output_path / TELEMETRY_FILE
    with target.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, default=str) + "\n")
    return target
