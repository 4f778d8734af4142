#!/usr/bin/env python3
"""Render a Canvas quiz export plus its graded results as a Markdown study sheet."""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .assemble import assemble_questions
from .common import DEFAULT_MULTI_MARKERS, log
from .documents import DocumentError, derive_out_path, derive_week_label, load_quiz, load_results
from .models import QuestionRecord

def parse_args(argv: List[str]):
    p = argparse.ArgumentParser(description='Render quiz + results JSON to a Markdown solutions sheet')
    p.add_argument('--in', dest='quiz', default='', help="Path to quiz JSON (e.g., wk12.json). If empty, you'll be prompted.")
    p.add_argument('--results', default='', help="Path to results JSON (e.g., wk12_result.json). If empty, you'll be prompted.")
    p.add_argument('--out', default='', help='Output Markdown path. If empty, derived from the first 4 chars of the quiz filename.')
    p.add_argument('--week', default='', help='Week label for the header (e.g., WK12). Defaults to the wkNN filename prefix.')
    p.add_argument('--multi-marker', action='append', dest='multi_markers',
                   help=f"user_response_type substring marking multi-select items (repeatable, default: {', '.join(DEFAULT_MULTI_MARKERS)})")
    p.add_argument('--no-clobber', action='store_true', help='Fail instead of overwriting an existing output file')
    return p.parse_args(argv)

def prompt(message: str) -> str:
    try:
        return input(message).strip()
    except EOFError:
        return ''

def _render_question(q: QuestionRecord) -> List[str]:
    lines = [f"## {q.number}) {q.text}"]
    if not q.has_result:
        lines += ['- Options: (no result data)', '']
        return lines
    if q.open_entry:
        lines += ['- Options: N/A (open entry)', '', f"- Answer: {q.resolved_answers[0]}", '']
        return lines
    if q.options:
        lines.append('- Options:')
        for opt in q.options:
            lines.append(f"  - {opt.label} (correct)" if opt.correct else f"  - {opt.label}")
        lines.append('')
    if q.multi_answer and q.correct_labels:
        lines.append('- Correct answers:')
        lines += [f"  - {label}" for label in q.correct_labels]
        lines.append('')
    else:
        lines += [f"- Answer: {q.resolved_answers[0]}", '']
    return lines

def render_markdown(records: List[QuestionRecord], week_label: str = '') -> str:
    week = week_label.strip().upper() or 'WK'
    lines = [f"# {week} Quiz — Questions and Solutions", '']
    for q in records:
        lines += _render_question(q)
    return '\n'.join(lines) + '\n'

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    quiz_arg = args.quiz.strip() or prompt('Enter quiz JSON path (e.g., wk12.json): ')
    results_arg = args.results.strip() or prompt('Enter results JSON path (e.g., wk12_result.json): ')
    if not quiz_arg or not results_arg:
        log('error', 'Both a quiz JSON path and a results JSON path are required')
        return 1

    quiz_path = Path(quiz_arg).resolve()
    results_path = Path(results_arg).resolve()
    out_path = Path(args.out.strip()).resolve() if args.out.strip() else derive_out_path(quiz_path)

    try:
        quiz = load_quiz(quiz_path)
        results = load_results(results_path)
    except DocumentError as e:
        log('error', f"Failed to load input: {e}")
        return 1
    log('info', f"Loaded {len(quiz)} questions from {quiz_path} and {len(results)} results from {results_path}")

    if out_path.exists() and args.no_clobber:
        log('warning', f"{out_path} already exists (drop --no-clobber to overwrite)")
        return 1

    week = args.week.strip() or derive_week_label(quiz_path, out_path)
    records = assemble_questions(quiz, results, args.multi_markers or DEFAULT_MULTI_MARKERS)
    text = render_markdown(records, week)
    try:
        out_path.write_text(text, encoding='utf-8')
    except OSError as e:
        log('error', f"Failed to write markdown {out_path}: {e}")
        return 1
    print(f"[ok] Generated {out_path} from {quiz_path} and {results_path}")
    return 0

if __name__ == '__main__':
    try: raise SystemExit(main())
    except KeyboardInterrupt: print("\nInterrupted."); raise SystemExit(130)
