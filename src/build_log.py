"""Structured build events for the map and lint runs"""
import json
from pathlib import Path
from typing import Dict, Any, Optional, List
from datetime import datetime, UTC


# event_type -> payload keys every entry of that type must carry
BUILD_EVENTS: Dict[str, tuple] = {
    'code_errors': ('errors',),
    'schema_errors': ('path', 'errors'),
    'countries_loaded': ('path', 'countries', 'uncoded'),
    'unmatched_codes': ('codes',),
    'map_written': ('path', 'visited', 'planned', 'none'),
    'lint_failed': ('path', 'errors'),
}

BUILD_LOG_FILENAME = 'build_log.jsonl'


def log_build_event(
    event_type: str,
    payload: Dict[str, Any],
    logger: Optional[List[Dict]] = None,
    timestamp: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Record one build event.

    Args:
        event_type: One of BUILD_EVENTS
        payload: Event data; must contain the keys BUILD_EVENTS lists for the type
        logger: Optional list the entry is appended to (see write_build_log)
        timestamp: Optional timestamp (defaults to now)

    Returns:
        Structured log entry dict

    Raises:
        ValueError: unknown event type or missing payload keys
    """
    if event_type not in BUILD_EVENTS:
        raise ValueError(f"Unknown build event '{event_type}' (known: {', '.join(sorted(BUILD_EVENTS))})")
    missing = [k for k in BUILD_EVENTS[event_type] if k not in payload]
    if missing:
        raise ValueError(f"Build event '{event_type}' is missing {', '.join(missing)}")

    if timestamp is None:
        timestamp = datetime.now(UTC)

    log_entry = {
        'timestamp': timestamp.isoformat() if hasattr(timestamp, 'isoformat') else str(timestamp),
        'event_type': event_type,
        **payload
    }

    if logger is not None:
        logger.append(log_entry)

    print(f"[BUILD_LOG] {event_type}: {json.dumps(payload, default=str)}")

    return log_entry


def write_build_log(entries: List[Dict], html_path: Path) -> Path:
    """Write collected entries as build_log.jsonl beside the rendered page"""
    path = Path(html_path).with_name(BUILD_LOG_FILENAME)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        for entry in entries:
            f.write(json.dumps(entry, default=str) + '\n')
    return path
