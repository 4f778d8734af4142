from __future__ import annotations
import html
import re
from datetime import datetime as _dt

UNAVAILABLE = "(answer unavailable)"
DEFAULT_MULTI_MARKERS = ("multipleuuid",)

_TAG_RE = re.compile(r"</?[A-Za-z!][^<>]*>")

# Simple logger
def log(level: str, msg: str) -> None:
    ts = _dt.now().isoformat(timespec='seconds')
    print(f"[{ts}] [{level}] {msg}")

def strip_markup(text) -> str:
    """Drop tags, decode entities and collapse whitespace to single spaces."""
    if not text:
        return ''
    out = str(text)
    # entities can decode into new tags, so repeat until nothing changes
    while True:
        cleaned = html.unescape(_TAG_RE.sub('', out)).replace('\r', '')
        cleaned = ' '.join(cleaned.split())
        if cleaned == out:
            return cleaned
        out = cleaned

# Bool parser
def bool_true(v) -> bool:
    return str(v).strip().lower() in ('1', 'true', 'yes', 'y')
