"""Fenced code block extraction and syntax checks"""
import ast
import json
import re
from dataclasses import dataclass
from typing import List
import yaml


_FENCE_OPEN = re.compile(r'^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*)$')
_FENCE_CLOSE = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})\s*$')

PYTHON_LANGUAGES = {'python', 'py', 'python3'}
YAML_LANGUAGES = {'yaml', 'yml'}
JSON_LANGUAGES = {'json'}


@dataclass
class CodeBlock:
    """One fenced block. line is the 1-based body line of the opening fence."""
    language: str
    source: str
    line: int

    @property
    def checked(self) -> bool:
        return self.language in PYTHON_LANGUAGES | YAML_LANGUAGES | JSON_LANGUAGES


def extract_code_blocks(body: str) -> List[CodeBlock]:
    """
    Return every fenced code block in a Markdown body.

    A block closes on a fence of the same character at least as long as the
    opening one, indented at most 3 spaces. An unterminated block runs to
    the end of the document.
    """
    blocks = []
    lines = body.splitlines()
    idx = 0
    while idx < len(lines):
        match = _FENCE_OPEN.match(lines[idx])
        if match is None:
            idx += 1
            continue

        fence = match.group('fence')
        info = match.group('info').strip()
        language = info.split()[0].lower() if info else ''
        # {python} / {.python} attribute style info strings
        language = language.strip('{}').lstrip('.')
        start = idx
        content = []
        idx += 1
        while idx < len(lines):
            closing = _FENCE_CLOSE.match(lines[idx])
            if closing and closing.group('fence')[0] == fence[0] and len(closing.group('fence')) >= len(fence):
                break
            content.append(lines[idx])
            idx += 1

        blocks.append(CodeBlock(language=language, source='\n'.join(content) + '\n', line=start + 1))
        idx += 1

    return blocks


def check_code_block(block: CodeBlock) -> List[str]:
    """Syntax-check one block in the language it declares. Returns list of errors."""
    errors = []
    where = f"line {block.line} ({block.language})"

    if block.language in PYTHON_LANGUAGES:
        try:
            ast.parse(block.source)
        except SyntaxError as e:
            errors.append(f"{where}: Python syntax error at block line {e.lineno}: {e.msg}")
        except ValueError as e:
            # null bytes on Python < 3.12
            errors.append(f"{where}: Python source rejected: {e}")
    elif block.language in YAML_LANGUAGES:
        try:
            list(yaml.safe_load_all(block.source))
        except (yaml.YAMLError, ValueError) as e:
            errors.append(f"{where}: invalid YAML: {e}")
    elif block.language in JSON_LANGUAGES:
        try:
            json.loads(block.source)
        except json.JSONDecodeError as e:
            errors.append(f"{where}: invalid JSON: {e}")

    return errors
