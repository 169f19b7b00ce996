"""
Lint Articles
Checks post front matter, fenced code block syntax and the deploy workflow.
"""
import argparse
import json
import sys
from pathlib import Path
import yaml

from visited_map.config.params_loader import ParamsLoader
from visited_map.src.article.lint import lint_article
from visited_map.src.build_log import log_build_event
from visited_map.src.pipeline.workflow import load_workflow, validate_workflow


def main(argv=None):
    parser = argparse.ArgumentParser(description="Lint Markdown posts and the deploy workflow")
    parser.add_argument("paths", nargs="*", help="Posts to lint (defaults to every post in article.posts_dir)")
    parser.add_argument("--params", type=str, help="Params JSON (defaults to config/base_params.json)")
    parser.add_argument("--workflow", type=str, help="Workflow YAML (defaults to article.workflow_path)")
    parser.add_argument("--skip-workflow", action="store_true", help="Do not check the workflow file")
    parser.add_argument("--json", action="store_true", help="Print reports as JSON")

    args = parser.parse_args(argv)
    params = ParamsLoader(args.params)

    if args.paths:
        posts = [Path(p) for p in args.paths]
    else:
        posts = sorted(Path(params.get('article', 'posts_dir')).glob('*.md'))
    if not posts:
        print("No posts found", file=sys.stderr)
        return 1

    reports = []
    failed = False
    for post in posts:
        try:
            report = lint_article(post, params)
        except FileNotFoundError as e:
            print(str(e), file=sys.stderr)
            failed = True
            continue
        reports.append(report.to_dict())
        if not report.ok:
            failed = True
            log_build_event("lint_failed", {'path': str(post), 'errors': report.errors})

    if not args.skip_workflow:
        workflow_path = Path(args.workflow or params.get('article', 'workflow_path'))
        workflow_errors = []
        if not workflow_path.exists():
            workflow_errors.append(f"Workflow does not exist: {workflow_path}")
        else:
            try:
                wf = load_workflow(workflow_path)
                workflow_errors.extend(validate_workflow(wf, params.get('article', 'default_branch', default='main')))
            except (ValueError, yaml.YAMLError) as e:
                workflow_errors.append(str(e))
        reports.append({'path': str(workflow_path), 'errors': workflow_errors})
        if workflow_errors:
            failed = True
            log_build_event("lint_failed", {'path': str(workflow_path), 'errors': workflow_errors})

    if args.json:
        print(json.dumps(reports, indent=2, default=str))
    else:
        for report in reports:
            status = "OK" if not report['errors'] else f"{len(report['errors'])} error(s)"
            print(f"{report['path']}: {status}")
            for error in report['errors']:
                print(f"  - {error}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
