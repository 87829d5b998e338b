"""
Workspace parser — pull package globs out of pnpm-workspace.yaml.

The manifest is user-authored YAML that this tool only skims. Flow lists (on one
line or several) and block lists are understood:

    packages: ['apps/*', 'packages/*']

    packages: [
      'apps/*',
    ]

    packages:
      - 'apps/*'
      - "packages/web"

Anything else degrades to an empty list instead of raising.
"""

from __future__ import annotations

import re

_PACKAGES_KEY = re.compile(r"^packages\s*:(.*)$")
_INLINE_LIST = re.compile(r"^\s*\[(.*)\]\s*(#.*)?$")


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value.strip("'\"")


def _parse_inline(body: str) -> list[str]:
    patterns = []
    for item in body.split(","):
        item = _unquote(item)
        if item:
            patterns.append(item)
    return patterns


def _strip_comment(line: str) -> str:
    # A '#' only starts a comment after whitespace, so quoted globs survive.
    match = re.search(r"\s#", line)
    return line[: match.start()] if match else line


def _parse_flow(first: str, following: list[str]) -> list[str]:
    # A flow list may run over several lines until its closing bracket.
    body = first
    for line in following:
        if "]" in body:
            break
        body += " " + _strip_comment(line).strip()
    inline = _INLINE_LIST.match(body)
    return _parse_inline(inline.group(1)) if inline else []


def parse_workspace_manifest(text: str) -> list[str]:
    """Parse workspace patterns from the raw text of a workspace manifest.

    Order is preserved and duplicates are kept. Returns ``[]`` when no
    ``packages:`` key is present or its list cannot be read.
    """
    patterns: list[str] = []
    inside = False

    lines = text.splitlines()
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()

        if not inside:
            match = _PACKAGES_KEY.match(line)
            if match is None:
                continue
            rest = match.group(1).strip()
            if rest.startswith("["):
                return _parse_flow(rest, lines[index + 1 :])
            if rest and not rest.startswith("#"):
                # Scalar value under packages: is not a list
                return []
            inside = True
            continue

        if not line or line.startswith("#"):
            continue
        if not line.startswith("-"):
            break
        entry = _unquote(_strip_comment(line[1:]))
        if entry:
            patterns.append(entry)

    return patterns
