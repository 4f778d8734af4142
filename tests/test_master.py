from __future__ import annotations
import sys

import pytest

import master


def test_load_yaml_missing_file_gives_defaults(tmp_path):
    assert master.load_yaml(tmp_path / 'params.yaml') == {}

def test_load_yaml_rejects_non_mapping(tmp_path):
    p = tmp_path / 'params.yaml'
    p.write_text('- just\n- a list\n', encoding='utf-8')
    with pytest.raises(SystemExit):
        master.load_yaml(p)

def test_get_solutions_and_args(tmp_path):
    p = tmp_path / 'params.yaml'
    p.write_text(
        'solutions:\n'
        '  quiz: wk12.json\n'
        '  results: wk12_result.json\n'
        '  multi_select_markers: multipleuuid\n'
        '  no_clobber: yes\n',
        encoding='utf-8',
    )
    vals = master.get_solutions(master.load_yaml(p))
    assert vals == {
        'quiz': 'wk12.json',
        'results': 'wk12_result.json',
        'multi_select_markers': ['multipleuuid'],
        'no_clobber': True,
    }
    assert master.solutions_args(vals) == [
        '-m', 'scripts.canvas.render_solutions',
        '--in', 'wk12.json', '--results', 'wk12_result.json',
        '--multi-marker', 'multipleuuid', '--no-clobber',
    ]

def test_get_solutions_empty_section():
    assert master.get_solutions({}) == {'multi_select_markers': [], 'no_clobber': False}

def test_dispatch_unknown_and_empty():
    assert master.dispatch([]) is None
    assert master.dispatch(['frobnicate']) == 2

def test_dispatch_solutions_runs_module(monkeypatch):
    seen = {}

    class Done:
        returncode = 0

    def fake_run(cmd, env):
        seen['cmd'] = cmd
        seen['env'] = env
        return Done()

    monkeypatch.setattr(master.subprocess, 'run', fake_run)
    assert master.dispatch(['solutions', '--week', 'WK01']) == 0
    assert seen['cmd'][0] == sys.executable
    assert seen['cmd'][1:3] == ['-m', 'scripts.canvas.render_solutions']
    assert seen['cmd'][-2:] == ['--week', 'WK01']
    assert 'PYTHONPATH' in seen['env']

@pytest.mark.parametrize('extra', [['--multi-marker', 'checkall'], ['--multi-marker=checkall']])
def test_cli_multi_marker_replaces_configured_markers(monkeypatch, extra):
    seen = {}

    class Done:
        returncode = 0

    def fake_run(cmd, env):
        seen['cmd'] = cmd
        return Done()

    monkeypatch.setattr(master, 'load_yaml', lambda _p: {'solutions': {'multi_select_markers': ['multipleuuid']}})
    monkeypatch.setattr(master.subprocess, 'run', fake_run)
    assert master.dispatch(['solutions', *extra]) == 0
    assert 'multipleuuid' not in seen['cmd']
    assert seen['cmd'][-len(extra):] == extra

def test_configured_markers_used_without_cli_override(monkeypatch):
    seen = {}

    class Done:
        returncode = 0

    def fake_run(cmd, env):
        seen['cmd'] = cmd
        return Done()

    monkeypatch.setattr(master, 'load_yaml', lambda _p: {'solutions': {'multi_select_markers': ['multipleuuid']}})
    monkeypatch.setattr(master.subprocess, 'run', fake_run)
    assert master.dispatch(['solutions']) == 0
    i = seen['cmd'].index('--multi-marker')
    assert seen['cmd'][i + 1] == 'multipleuuid'

def test_has_flag():
    assert master.has_flag(['--week', 'x', '--multi-marker', 'a'], '--multi-marker')
    assert master.has_flag(['--multi-marker=a'], '--multi-marker')
    assert not master.has_flag(['--multi-markers'], '--multi-marker')
