#!/usr/bin/env python3
import os
import sys
import subprocess
from pathlib import Path
from typing import List, Optional, Any, Dict

import yaml

from scripts.canvas.common import bool_true, log

# Log whether solutions defaults come from params.yaml or the CLI flags alone
def check_yaml_config(repo_root: Path) -> bool:
    yaml_path = repo_root / 'params.yaml'
    if yaml_path.exists():
        log('info', f"Found YAML config file: {yaml_path}")
        return True
    else:
        log('info', f"YAML config file not found: {yaml_path} (using defaults)")
        return False

# Read config params
def load_yaml(params_path: Path) -> Dict[str, Any]:
    if not params_path.exists():
        return {}
    log('info', f"Loading YAML params from: {params_path}")
    try:
        data = yaml.safe_load(params_path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        log('error', f"Could not parse {params_path}: {e}")
        sys.exit(1)
    if data is None:
        return {}
    if not isinstance(data, dict):
        log('error', 'Invalid YAML structure: expected a top-level mapping')
        sys.exit(1)
    return data

# Optional keys from the solutions section
def get_solutions(cfg: Dict[str, Any]) -> Dict[str, Any]:
    s = cfg.get('solutions') or {}
    if not isinstance(s, dict):
        log('error', "'solutions' section in params.yaml must be a mapping")
        sys.exit(1)
    out: Dict[str, Any] = {}
    for k in ('quiz', 'results', 'out', 'week'):
        if s.get(k):
            out[k] = str(s[k])
            log('info', f"solutions[{k}] = {out[k]}")
    markers = s.get('multi_select_markers')
    if isinstance(markers, str):
        markers = [markers]
    out['multi_select_markers'] = [str(m) for m in (markers or []) if str(m).strip()]
    out['no_clobber'] = bool_true(s.get('no_clobber', 'false'))
    return out

def solutions_args(vals: Dict[str, Any]) -> List[str]:
    args = ['-m', 'scripts.canvas.render_solutions']
    flags = {'quiz': '--in', 'results': '--results', 'out': '--out', 'week': '--week'}
    for key, flag in flags.items():
        if key in vals:
            args += [flag, vals[key]]
    for m in vals.get('multi_select_markers', []):
        args += ['--multi-marker', m]
    if vals.get('no_clobber'):
        args.append('--no-clobber')
    return args

def has_flag(argv: List[str], flag: str) -> bool:
    return any(a == flag or a.startswith(flag + '=') for a in argv)

# Dispatch based on subcommand
def dispatch(argv: List[str]) -> Optional[int]:
    log('info', f"Entered dispatch with argv: {argv}")
    if not argv:
        log('warning', 'No subcommand provided to dispatch.')
        return None

    repo_root = Path(__file__).resolve().parent
    check_yaml_config(repo_root)
    cfg = load_yaml(repo_root / 'params.yaml')

    sub = argv[0].lower()
    if sub == 'solutions':
        # Extra argv after the subcommand override params.yaml values
        vals = get_solutions(cfg)
        if has_flag(argv[1:], '--multi-marker'):
            vals['multi_select_markers'] = []
        cmd = [sys.executable, *solutions_args(vals), *argv[1:]]
        log('info', f"Executing command: {' '.join(cmd)}")
        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(p for p in (str(repo_root), env.get('PYTHONPATH', '')) if p)
        return subprocess.run(cmd, env=env).returncode
    else:
        log('error', f"Unknown subcommand: {sub}")
        return 2

if __name__ == "__main__":
    sys.exit(dispatch(sys.argv[1:]))
