"""Structured event log written to the workflow's log file."""

from __future__ import annotations

import json
import os
import time
from collections import Counter
from importlib import resources
from typing import Any, Iterable, Iterator

import jsonschema

from workflowkit.settings import RuntimeSettings, falsy

LEVELS = {"info", "warn", "error"}
MAGIC_EVENT = "magic-action"

_TELEMETRY_VALIDATOR = None


def telemetry_enabled() -> bool:
    return not falsy(os.getenv("WORKFLOWKIT_TELEMETRY", "1"))


def record_event(
    settings: RuntimeSettings,
    event: str,
    payload: dict[str, Any] | None = None,
    *,
    level: str = "info",
    status: str | None = None,
    component: str | None = None,
    duration_ms: float | None = None,
) -> None:
    if not telemetry_enabled():
        return
    record: dict[str, Any] = {
        "ts": time.time(),
        "event": event,
        "payload": payload or {},
        "level": level,
        "bundleId": settings.bundle_id,
    }
    if status:
        record["status"] = status
    if component:
        record["component"] = component
    if duration_ms is not None:
        record["durationMs"] = duration_ms
    _validate_record(record)
    _telemetry_validator().validate(record)
    log_path = settings.log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


def iter_events(settings: RuntimeSettings, event: str | None = None) -> Iterator[dict[str, Any]]:
    """Yield logged records, oldest first, optionally only those named ``event``.

    Lines that are not JSON objects are skipped; the log may be appended to
    by several workflow runs at once.
    """

    log_path = settings.log_file
    if not log_path.is_file():
        return
    with log_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(record, dict):
                continue
            if event is None or record.get("event") == event:
                yield record


def summarize(events: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Counts per event and status, plus per-keyword outcomes of magic actions."""

    by_event: Counter[str] = Counter()
    by_status: Counter[str] = Counter()
    by_keyword: dict[str, Counter[str]] = {}
    listings = 0
    for evt in events:
        by_event[evt.get("event", "unknown")] += 1
        status = evt.get("status", "unknown")
        by_status[status] += 1
        if evt.get("event") != MAGIC_EVENT:
            continue
        keyword = evt.get("payload", {}).get("keyword")
        if keyword:
            by_keyword.setdefault(keyword, Counter())[status] += 1
        elif status == "shown":
            listings += 1
    return {
        "total": sum(by_event.values()),
        "by_event": dict(by_event),
        "by_status": dict(by_status),
        "by_keyword": {keyword: dict(counts) for keyword, counts in by_keyword.items()},
        "listings": listings,
    }


def clear(settings: RuntimeSettings) -> None:
    settings.log_file.unlink(missing_ok=True)


def _validate_record(record: dict[str, Any]) -> None:
    if not isinstance(record.get("event"), str) or not record["event"].strip():
        raise ValueError("Telemetry event must have non-empty string 'event'")
    if not isinstance(record.get("payload"), dict):
        raise ValueError("Telemetry payload must be a dict")
    if record["event"] == MAGIC_EVENT and not ({"keyword", "query"} & set(record["payload"])):
        raise ValueError("Magic action events need a 'keyword' or 'query' in the payload")
    level = record.get("level", "info")
    if level not in LEVELS:
        raise ValueError(f"Telemetry level '{level}' is not supported")
    if "durationMs" in record and record["durationMs"] is not None:
        if not isinstance(record["durationMs"], (int, float)) or record["durationMs"] < 0:
            raise ValueError("Telemetry durationMs must be a non-negative number")


def _telemetry_validator():  # pragma: no cover - trivial cache
    global _TELEMETRY_VALIDATOR
    if _TELEMETRY_VALIDATOR is not None:
        return _TELEMETRY_VALIDATOR
    schema_resource = resources.files("workflowkit.resources") / "telemetry.schema.json"
    schema = json.loads(schema_resource.read_text(encoding="utf-8"))
    _TELEMETRY_VALIDATOR = jsonschema.Draft202012Validator(schema)
    return _TELEMETRY_VALIDATOR
