"""Checks for the build-then-deploy static site workflow"""
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import yaml


BUILD_JOB = 'build'
DEPLOY_JOB = 'deploy'

# (description, (step key, fragment, fragment that disqualifies))
BUILD_STEP_RULES = [
    ('checkout', ('uses', 'actions/checkout', None)),
    ('Python setup', ('uses', 'actions/setup-python', None)),
    ('dependency install', ('run', 'pip install', None)),
    ('map script run', ('run', 'python', 'pip install')),
    ('artifact upload', ('uses', 'actions/upload-pages-artifact', None)),
]
DEPLOY_STEP_RULES = [
    ('pages deployment', ('uses', 'actions/deploy-pages', None)),
]
DEPLOY_PERMISSIONS = {'pages': 'write', 'id-token': 'write'}


def _names_file(source: Any) -> bool:
    if not isinstance(source, str) or '\n' in source or not source.strip():
        return False
    try:
        return Path(source).is_file()
    except OSError:
        # e.g. name too long for a one-line YAML document
        return False


def load_workflow(source: Union[str, Path]) -> Dict[str, Any]:
    """
    Parse a workflow from a path (Path, or a one-line str naming an existing
    file) or from YAML text.

    YAML 1.1 reads the bare key `on` as boolean True; it is restored to "on".
    """
    if isinstance(source, Path) or _names_file(source):
        text = Path(source).read_text(encoding='utf-8')
    else:
        text = source

    wf = yaml.safe_load(text)
    if not isinstance(wf, dict):
        raise ValueError(f"Workflow must be a mapping, got {type(wf).__name__}")
    if True in wf and 'on' not in wf:
        wf['on'] = wf.pop(True)
    return wf


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _push_branches(trigger: Any) -> Union[List[str], None]:
    """Branches a push trigger covers. [] means any branch, None means no push trigger."""
    if isinstance(trigger, str):
        return [] if trigger == 'push' else None
    if isinstance(trigger, list):
        return [] if 'push' in trigger else None
    if isinstance(trigger, dict):
        if 'push' not in trigger:
            return None
        push = trigger['push'] or {}
        return [str(b) for b in _as_list(push.get('branches'))]
    return None


def _has_step(steps: Iterable[Dict[str, Any]], key: str, fragment: str, exclude: Optional[str] = None) -> bool:
    for step in steps:
        if not isinstance(step, dict):
            continue
        value = step.get(key)
        if not isinstance(value, str):
            continue
        # multi-line run blocks count line by line
        for line in value.splitlines():
            if fragment in line and not (exclude and exclude in line):
                return True
    return False


def _permissions(wf: Dict[str, Any], job: Dict[str, Any]) -> Dict[str, Any]:
    """Job permissions override workflow permissions"""
    merged = {}
    for scope in (wf.get('permissions'), job.get('permissions')):
        if isinstance(scope, dict):
            merged.update(scope)
    return merged


def validate_workflow(wf: Dict[str, Any], default_branch: str = 'main') -> List[str]:
    """Validate the two-job workflow shape. Returns list of errors (empty if valid)."""
    errors = []

    branches = _push_branches(wf.get('on'))
    if branches is None:
        errors.append("Workflow is not triggered on push")
    elif branches and default_branch not in branches:
        errors.append(f"Push trigger does not include default branch '{default_branch}'")

    jobs = wf.get('jobs')
    if not isinstance(jobs, dict):
        errors.append("Workflow has no jobs")
        return errors

    missing = [n for n in (BUILD_JOB, DEPLOY_JOB) if not isinstance(jobs.get(n), dict)]
    for name in missing:
        errors.append(f"Missing job '{name}'")
    if missing:
        return errors

    build = jobs[BUILD_JOB]
    deploy = jobs[DEPLOY_JOB]

    build_steps = _as_list(build.get('steps'))
    for description, (key, fragment, exclude) in BUILD_STEP_RULES:
        if not _has_step(build_steps, key, fragment, exclude):
            errors.append(f"Job '{BUILD_JOB}' has no {description} step")

    if BUILD_JOB not in [str(n) for n in _as_list(deploy.get('needs'))]:
        errors.append(f"Job '{DEPLOY_JOB}' does not need '{BUILD_JOB}'")

    deploy_steps = _as_list(deploy.get('steps'))
    for description, (key, fragment, exclude) in DEPLOY_STEP_RULES:
        if not _has_step(deploy_steps, key, fragment, exclude):
            errors.append(f"Job '{DEPLOY_JOB}' has no {description} step")

    permissions = _permissions(wf, deploy)
    for scope, level in DEPLOY_PERMISSIONS.items():
        if permissions.get(scope) != level:
            errors.append(f"Job '{DEPLOY_JOB}' needs permission {scope}: {level}")

    return errors
