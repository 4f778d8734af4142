from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .common import DEFAULT_MULTI_MARKERS, log
from .models import QuestionRecord
from .normalize import normalize_question

def _num(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0

def question_sort_key(index: int, raw: Dict[str, Any]) -> Tuple[float, float, int]:
    return (_num(raw.get('position')), _num(raw.get('question_number')), index)

def item_id_of(raw: Dict[str, Any]) -> str:
    item = raw.get('item')
    return str(item.get('id') or '') if isinstance(item, dict) else ''

def index_results(results: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Map item_id -> result entry; the first entry for a duplicated id wins."""
    by_id: Dict[str, Dict[str, Any]] = {}
    for res in results:
        rid = str(res.get('item_id') or '')
        if not rid:
            continue
        if rid in by_id:
            log('warning', f"Duplicate result for item_id={rid}; keeping the first")
            continue
        by_id[rid] = res
    return by_id

def assemble_questions(questions: List[Dict[str, Any]], results: List[Dict[str, Any]],
                       multi_markers: Iterable[str] = DEFAULT_MULTI_MARKERS) -> List[QuestionRecord]:
    markers = tuple(multi_markers)
    by_id = index_results(results)
    ordered = sorted(enumerate(questions), key=lambda pair: question_sort_key(*pair))
    records: List[QuestionRecord] = []
    for rank, (_, raw) in enumerate(ordered, start=1):
        qid = item_id_of(raw)
        res: Optional[Dict[str, Any]] = by_id.get(qid) if qid else None
        if res is None:
            log('warning', f"No result data for question {rank} (item_id={qid or '?'})")
        records.append(normalize_question(raw, res, number=rank, multi_markers=markers))
    return records
