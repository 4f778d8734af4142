from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .common import UNAVAILABLE

# =========================
# Choice encodings
# =========================

@dataclass(frozen=True)
class Choice:
    label: str
    id: str
    position: int

@dataclass(frozen=True)
class FlatChoices:
    """Choices already stored as a list of {item_body, id, position}."""
    entries: List[Dict[str, Any]]

@dataclass(frozen=True)
class BooleanChoices:
    true_label: str = 'True'
    false_label: str = 'False'

@dataclass(frozen=True)
class KeyedChoices:
    """Choices stored as {id: {item_body}}; order is the shuffled display order, if any."""
    entries: Dict[str, Any]
    order: Optional[List[str]] = None

@dataclass(frozen=True)
class NoChoices:
    pass

# =========================
# Scored value encodings
# =========================

@dataclass(frozen=True)
class MappedResult:
    entries: Dict[str, Any]

@dataclass(frozen=True)
class OrderedResult:
    rows: List[Any]

@dataclass(frozen=True)
class EmptyResult:
    pass

# =========================
# Canonical record
# =========================

ANSWERED = 'answered'
NO_RESULT = 'no_result'

@dataclass(frozen=True)
class Option:
    label: str
    id: str
    correct: bool = False

@dataclass(frozen=True)
class QuestionRecord:
    number: int
    item_id: str
    text: str
    options: Tuple[Option, ...] = ()
    open_entry: bool = False
    answer: Optional[str] = None
    multi_answer: bool = False
    correct_labels: Tuple[str, ...] = ()
    state: str = ANSWERED

    @property
    def has_result(self) -> bool:
        return self.state != NO_RESULT

    @property
    def resolved_answers(self) -> Tuple[str, ...]:
        """Answers to show; never empty for a record with result data."""
        if not self.has_result:
            return ()
        if self.open_entry:
            return (self.answer or UNAVAILABLE,)
        return self.correct_labels or (UNAVAILABLE,)
