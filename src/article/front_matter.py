"""Front matter parsing and validation for Markdown posts"""
from datetime import date, datetime
from typing import Any, Dict, List, Sequence, Tuple
import yaml


DELIMITER = '---'
DEFAULT_REQUIRED_FIELDS = ['author', 'title', 'date', 'description', 'tags']


class FrontMatterError(ValueError):
    """Front matter block is absent, unterminated or not a mapping"""


def split_front_matter(text: str) -> Tuple[str, str]:
    """
    Split a post into (front matter YAML, body).

    The block must start on the first line with '---' and end with the next
    line consisting only of '---'.
    """
    lines = text.lstrip('\ufeff').splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError("Post does not start with a '---' front matter block")

    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            return ''.join(lines[1:idx]), ''.join(lines[idx + 1:])

    raise FrontMatterError("Front matter block is not terminated by '---'")


def parse_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Return (metadata, body). Raises FrontMatterError on malformed YAML."""
    raw, body = split_front_matter(text)
    try:
        meta = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        # impossible timestamps (2024-13-01) surface as ValueError
        raise FrontMatterError(f"Front matter is not valid YAML: {e}") from e

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(meta).__name__}")
    return meta, body


def _is_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if isinstance(value, str):
        try:
            datetime.fromisoformat(value.strip())
            return True
        except ValueError:
            return False
    return False


def validate_front_matter(meta: Dict[str, Any], required_fields: Sequence[str] = None) -> List[str]:
    """Validate metadata. Returns list of errors (empty if valid)."""
    errors = []
    required = list(required_fields or DEFAULT_REQUIRED_FIELDS)

    for field in required:
        if field not in meta or meta[field] is None:
            errors.append(f"Missing required field '{field}'")
            continue

        value = meta[field]
        if field == 'date':
            if not _is_date(value):
                errors.append(f"'date' must be an ISO date, got {value!r}")
        elif field == 'tags':
            if not isinstance(value, list) or not value:
                errors.append("'tags' must be a non-empty list")
            elif not all(isinstance(t, str) and t.strip() for t in value):
                errors.append("'tags' must contain only non-empty strings")
        elif not isinstance(value, str) or not value.strip():
            errors.append(f"'{field}' must be a non-empty string")

    return errors
