"""Documentation checks for a single post"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from visited_map.src.article.code_blocks import CodeBlock, YAML_LANGUAGES, check_code_block, extract_code_blocks
from visited_map.src.article.front_matter import (
    DEFAULT_REQUIRED_FIELDS,
    FrontMatterError,
    parse_front_matter,
    validate_front_matter,
)
from visited_map.src.pipeline.workflow import load_workflow, validate_workflow


@dataclass
class ArticleReport:
    """Everything found while linting one post"""
    path: Path
    metadata: Dict[str, Any] = field(default_factory=dict)
    blocks: List[CodeBlock] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': str(self.path),
            'title': self.metadata.get('title'),
            'code_blocks': [{'language': b.language, 'line': b.line, 'checked': b.checked} for b in self.blocks],
            'errors': list(self.errors),
        }


def is_workflow_block(block: CodeBlock) -> bool:
    """A YAML listing with a top-level 'jobs' key is a quoted CI workflow"""
    if block.language not in YAML_LANGUAGES:
        return False
    return any(line.startswith('jobs:') for line in block.source.splitlines())


def lint_text(
    text: str,
    path: Path,
    required_fields: Optional[Sequence[str]] = None,
    default_branch: str = 'main'
) -> ArticleReport:
    """Lint post content. Content problems are collected, never raised."""
    report = ArticleReport(path=Path(path))

    try:
        meta, body = parse_front_matter(text)
    except FrontMatterError as e:
        report.errors.append(f"front matter: {e}")
        return report

    report.metadata = meta
    report.errors.extend(f"front matter: {e}" for e in validate_front_matter(meta, required_fields or DEFAULT_REQUIRED_FIELDS))

    # Body line numbers are offset by the front matter block
    offset = len(text.splitlines()) - len(body.splitlines())
    for block in extract_code_blocks(body):
        block.line += offset
        report.blocks.append(block)
        block_errors = check_code_block(block)
        report.errors.extend(block_errors)

        if not block_errors and is_workflow_block(block):
            try:
                wf = load_workflow(block.source)
            except ValueError as e:
                report.errors.append(f"line {block.line} (workflow): {e}")
                continue
            report.errors.extend(f"line {block.line} (workflow): {e}" for e in validate_workflow(wf, default_branch))

    return report


def lint_article(path: str, params=None) -> ArticleReport:
    """
    Lint a post on disk.

    Args:
        path: Markdown file
        params: Optional ParamsLoader; uses its 'article' group

    Raises:
        FileNotFoundError: if the post does not exist
    """
    post = Path(path)
    if not post.exists():
        raise FileNotFoundError(f"Post does not exist: {path}")

    required_fields = None
    default_branch = 'main'
    if params is not None:
        required_fields = params.get('article', 'required_fields')
        default_branch = params.get('article', 'default_branch', default='main')

    try:
        text = post.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        return ArticleReport(path=post, errors=[f"encoding: post is not valid UTF-8: {e}"])

    return lint_text(text, post, required_fields, default_branch)
