from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def make_item(item_id: str, body: str = '<p>Question?</p>', *, position: Any = 0, question_number: Any = 0,
              response_type: str = 'Uuid', slug: str = 'choice', **interaction: Any) -> Dict[str, Any]:
    return {
        'position': position,
        'question_number': question_number,
        'points_possible': 1.0,
        'item': {
            'id': item_id,
            'title': f"Question {item_id}",
            'item_body': body,
            'user_response_type': response_type,
            'interaction_type': {'slug': slug, 'name': slug.title()},
            'interaction_data': interaction,
        },
    }

def make_result(item_id: str, value: Any, position: int = 0) -> Dict[str, Any]:
    return {'item_id': item_id, 'position': position, 'score': 1.0,
            'scored_data': {'correct': True, 'value': value}}

def flat_choices(*labels: str) -> List[Dict[str, Any]]:
    return [{'id': f"c{i}", 'item_body': f"<p>{label}</p>", 'position': i}
            for i, label in enumerate(labels, start=1)]


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def week_docs(write_json):
    """A small quiz covering choice, multi-select, true/false and fill-blank items."""
    quiz = [
        make_item('q-tf', '<p>The sky is blue.</p>', position=3, response_type='Boolean', slug='true-false'),
        make_item('q-mc', '<p>Pick <b>one</b></p>', position=1, choices=flat_choices('Alpha', 'Beta', 'Gamma')),
        make_item('q-blank', '<p>Capital of France is ___</p>', position=2, response_type='Text', slug='fill-blank',
                  blanks=[{'id': 'b1', 'answer_type': 'openEntry'}]),
        make_item('q-multi', '<p>Pick all primes</p>', position=4, response_type='MultipleUuid',
                  choices=flat_choices('2', '4', '5')),
        make_item('q-missing', '<p>Unscored</p>', position=5, choices=flat_choices('Yes', 'No')),
    ]
    results = [
        make_result('q-mc', {'c2': {'result_score': 1, 'user_responded': True}, 'c1': {'result_score': 0}}),
        make_result('q-blank', {'b1': {'correct_answer': 'Paris', 'user_response': 'paris'}}),
        make_result('q-tf', {'true': {'correct': True}}),
        make_result('q-multi', {'c1': {'result_score': 1}, 'c3': {'result_score': 1}}),
    ]
    return write_json('wk07.json', quiz), write_json('wk07_result.json', results)
