from __future__ import annotations
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from .common import log

WEEK_RE = re.compile(r'^(wk\d{2})', re.IGNORECASE)


class DocumentError(RuntimeError):
    """A quiz or results document could not be read or has the wrong shape."""


def load_json(path: Path) -> Any:
    if not path.exists():
        raise DocumentError(f"file {path} not found")
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentError(f"invalid JSON in {path}: {e}") from e

def _load_records(path: Path, what: str) -> List[Dict[str, Any]]:
    data = load_json(path)
    if not isinstance(data, list):
        raise DocumentError(f"{what} {path}: expected a JSON array, got {type(data).__name__}")
    records = [row for row in data if isinstance(row, dict)]
    if len(records) != len(data):
        log('warning', f"{what} {path}: skipped {len(data) - len(records)} non-object entries")
    return records

def load_quiz(path: Path) -> List[Dict[str, Any]]:
    return _load_records(path, 'quiz')

def load_results(path: Path) -> List[Dict[str, Any]]:
    return _load_records(path, 'results')

def derive_out_path(quiz_path: Path) -> Path:
    """wk12.json -> wk12_quiz_solutions.md next to the quiz file."""
    prefix = quiz_path.stem[:4]
    return quiz_path.parent / f"{prefix}_quiz_solutions.md"

def derive_week_label(*paths: Optional[Path]) -> str:
    for p in paths:
        if p is None:
            continue
        m = WEEK_RE.match(Path(p).stem)
        if m:
            return m.group(1).upper()
    return ''
