from __future__ import annotations
from pathlib import Path
from typing import Any, List
import json
import logging

from .models import Record

log = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Raised when the local meetings file cannot be read as a list of records."""


def load_local_records(path: str) -> List[Record]:
    p = Path(path)
    if not p.exists():
        return []
    try:
        data: Any = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RepositoryError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise RepositoryError(f"{path} must hold a list of meeting records")
    return data


def clear_local_records(path: str) -> bool:
    """Recovery hook: drop every stored local record. Returns True if anything was removed."""
    p = Path(path)
    if not p.exists():
        return False
    p.unlink()
    log.warning("Cleared local meeting records at %s", path)
    return True
