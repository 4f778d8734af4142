"""Turn one Canvas quiz item and its graded result into a QuestionRecord.

Canvas exports encode choices and scores in several shapes depending on the
interaction type. Each shape is probed into a tagged variant (see models.py)
and decoded by its own branch.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from .common import DEFAULT_MULTI_MARKERS, UNAVAILABLE, log, strip_markup
from .models import (
    ANSWERED, NO_RESULT,
    BooleanChoices, Choice, EmptyResult, FlatChoices, KeyedChoices, MappedResult,
    NoChoices, Option, OrderedResult, QuestionRecord,
)

ChoiceEncoding = Union[FlatChoices, BooleanChoices, KeyedChoices, NoChoices]
ResultEncoding = Union[MappedResult, OrderedResult, EmptyResult]


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

def _is_one(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and value == 1

def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}

def is_boolean_item(user_response_type: str, interaction_slug: str) -> bool:
    return (user_response_type or '').lower() == 'boolean' or interaction_slug == 'true-false'

def is_multi_select(user_response_type: str, markers: Iterable[str] = DEFAULT_MULTI_MARKERS) -> bool:
    rt = (user_response_type or '').lower()
    return any(m and m.lower() in rt for m in markers)

# =========================
# Choices
# =========================

def probe_choices(interaction_data: Dict[str, Any], user_response_type: str = '',
                  interaction_slug: str = '') -> ChoiceEncoding:
    raw = interaction_data.get('choices')
    if isinstance(raw, list):
        entries = [c for c in raw if isinstance(c, dict)]
        if entries:
            return FlatChoices(entries)
    if is_boolean_item(user_response_type, interaction_slug):
        return BooleanChoices(
            true_label=interaction_data.get('true_choice') or 'True',
            false_label=interaction_data.get('false_choice') or 'False',
        )
    if isinstance(raw, dict) and raw:
        order = interaction_data.get('shuffled_order')
        if isinstance(order, list) and order:
            return KeyedChoices(raw, [str(cid) for cid in order])
        return KeyedChoices(raw)
    return NoChoices()

def _choice_label(entry: Any) -> str:
    entry = _as_dict(entry)
    return strip_markup(entry.get('item_body') or entry.get('text') or '')

def _keyed_in_map_order(entries: Dict[str, Any], item_id: str = '') -> List[Choice]:
    out: List[Choice] = []
    recovered: List[str] = []
    for key, entry in entries.items():
        cid = _as_dict(entry).get('id')
        if not cid:
            cid = key
            recovered.append(str(key))
        cid = str(cid)
        out.append(Choice(label=_choice_label(entry), id=cid, position=len(out) + 1))
    if recovered:
        log('warning', f"item_id={item_id or '?'}: choices without an id keyed by map key: {', '.join(recovered)}")
    return out

def normalize_choices(encoding: ChoiceEncoding, item_id: str = '') -> List[Choice]:
    """Flatten any choice encoding into Choice rows sorted by display position."""
    if isinstance(encoding, FlatChoices):
        rows = [
            Choice(label=_choice_label(c), id=str(c.get('id') or ''), position=_as_int(c.get('position')))
            for c in encoding.entries
        ]
        return sorted(rows, key=lambda c: c.position)
    if isinstance(encoding, BooleanChoices):
        return [
            Choice(label=strip_markup(encoding.true_label), id='true', position=1),
            Choice(label=strip_markup(encoding.false_label), id='false', position=2),
        ]
    if isinstance(encoding, KeyedChoices):
        out: List[Choice] = []
        for cid in encoding.order or []:
            if cid in encoding.entries:
                out.append(Choice(label=_choice_label(encoding.entries[cid]), id=cid, position=len(out) + 1))
        if not out:
            if encoding.order:
                log('warning', f"item_id={item_id or '?'}: shuffled_order matches no choice; using map order")
            return _keyed_in_map_order(encoding.entries, item_id)
        dropped = [str(k) for k in encoding.entries if str(k) not in encoding.order]
        if dropped:
            log('warning', f"item_id={item_id or '?'}: choices missing from shuffled_order dropped: {', '.join(dropped)}")
        return out
    return []

# =========================
# Scored values
# =========================

def probe_result(value: Any, item_id: str = '') -> ResultEncoding:
    if isinstance(value, dict) and value:
        return MappedResult(value)
    if isinstance(value, list):
        return OrderedResult(value)
    if value not in (None, {}, ''):
        log('warning', f"item_id={item_id or '?'}: unrecognised scored value {type(value).__name__}; no correct choices")
    return EmptyResult()

def derive_correct_ids(encoding: ResultEncoding, item_id: str = '') -> Set[str]:
    ids: Set[str] = set()
    skipped: List[str] = []
    if isinstance(encoding, MappedResult):
        for cid, entry in encoding.entries.items():
            if not isinstance(entry, dict):
                skipped.append(str(cid))
                continue
            if _is_one(entry.get('result_score')) or entry.get('correct') is True:
                ids.add(str(cid))
    elif isinstance(encoding, OrderedResult):
        # ordering items: a scored row names the choice id that belongs there
        for idx, row in enumerate(encoding.rows):
            if not isinstance(row, dict):
                skipped.append(f"row {idx}")
                continue
            if not _is_one(row.get('result_score')):
                continue
            value = row.get('value')
            if isinstance(value, (str, int)) and not isinstance(value, bool) and value != '':
                ids.add(str(value))
    if skipped:
        log('warning', f"item_id={item_id or '?'}: malformed scored entries skipped: {', '.join(skipped)}")
    return ids

def resolve_blank_answer(blanks: List[Dict[str, Any]], value: Any) -> str:
    answer = ''
    if blanks and isinstance(value, dict):
        entry = _as_dict(value.get(str(blanks[0].get('id', ''))))
        answer = entry.get('correct_answer') or entry.get('user_response') or ''
    return strip_markup(answer) or UNAVAILABLE

def scored_value(result: Optional[Dict[str, Any]]) -> Any:
    if not result:
        return None
    return _as_dict(result.get('scored_data')).get('value')

# =========================
# Question
# =========================

def normalize_question(raw: Dict[str, Any], result: Optional[Dict[str, Any]], number: int = 0,
                       multi_markers: Iterable[str] = DEFAULT_MULTI_MARKERS) -> QuestionRecord:
    """Build the canonical record for one quiz item.

    ``result`` is the matching entry of the results document, or None when the
    results have no entry for this item; the record is then flagged NO_RESULT
    and carries no answer.
    """
    item = _as_dict(raw.get('item'))
    idata = _as_dict(item.get('interaction_data'))
    item_id = str(item.get('id') or '')
    text = strip_markup(item.get('item_body'))
    response_type = str(item.get('user_response_type') or '')
    slug = str(_as_dict(item.get('interaction_type')).get('slug') or '')
    state = ANSWERED if result is not None else NO_RESULT

    blanks = [b for b in (idata.get('blanks') or []) if isinstance(b, dict)]
    if blanks:
        answer = resolve_blank_answer(blanks, scored_value(result)) if result is not None else None
        return QuestionRecord(number=number, item_id=item_id, text=text, open_entry=True,
                              answer=answer, state=state)

    choices = normalize_choices(probe_choices(idata, response_type, slug), item_id)
    if result is None:
        options = tuple(Option(label=c.label, id=c.id) for c in choices)
        return QuestionRecord(number=number, item_id=item_id, text=text, options=options, state=state)

    correct_ids = derive_correct_ids(probe_result(scored_value(result), item_id), item_id)
    options = tuple(Option(label=c.label, id=c.id, correct=c.id in correct_ids) for c in choices)
    correct_labels = tuple(o.label for o in options if o.correct)
    multi = is_multi_select(response_type, multi_markers) or len(correct_labels) > 1
    return QuestionRecord(number=number, item_id=item_id, text=text, options=options,
                          multi_answer=multi, correct_labels=correct_labels, state=state)
