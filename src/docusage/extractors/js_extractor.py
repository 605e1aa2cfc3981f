"""
Extract declarations from JavaScript/TypeScript source code.
"""
from typing import Optional

from docusage.extractors.patterns import (
    JS_EXPORT_DECLARATION,
    JS_EXPORT_DEFAULT_NAME,
    JS_EXPORT_BRACES,
    JSDOC_BLOCK,
)

__all__ = [
    "extract_exports",
    "extract_jsdoc",
]


def _unique(names: list[str]) -> list[str]:
    """Drop duplicates, preserving first-seen order."""
    seen = set()
    unique = []
    for name in names:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique


def extract_exports(content: str) -> list[str]:
    """
    Extract exported names from JavaScript/TypeScript code.

    Matches:
    - export function Name
    - export default function Name
    - export const Name
    - export default Name
    - export { Name, Other as Alias }

    For renamed exports the local name is kept, since that is the name
    the declaration carries in this file.

    Args:
        content: JS/TS source code as a string

    Returns:
        list: Names that are exported, in order of appearance
    """
    found: list[tuple[int, str]] = []

    # export [default] function/class/const Name
    for match in JS_EXPORT_DECLARATION.finditer(content):
        found.append((match.start(), match.group(1)))

    # export default Name;
    for match in JS_EXPORT_DEFAULT_NAME.finditer(content):
        found.append((match.start(), match.group(1)))

    # export { Name, Name2 as Alias }
    for match in JS_EXPORT_BRACES.finditer(content):
        names = [n.strip().split(' ')[0] for n in match.group(1).split(',')]
        found.extend((match.start(), n) for n in names if n and n.isidentifier())

    found.sort(key=lambda item: item[0])
    return _unique([name for _, name in found])


def _clean_jsdoc(body: str) -> str:
    """Strip comment gutters and stop at the first block tag (@param etc)."""
    lines = []
    for raw in body.splitlines():
        line = raw.strip().lstrip('*').strip()
        if line.startswith('@'):
            break
        lines.append(line)
    return "\n".join(lines).strip()


def extract_jsdoc(content: str, name: str) -> Optional[str]:
    """
    Get the JSDoc description attached to a declaration.

    Args:
        content: JS/TS source code as a string
        name: Declared name to look up

    Returns:
        The description text, or None if the declaration has no JSDoc block
    """
    for match in JSDOC_BLOCK.finditer(content):
        if match.group(2) == name:
            description = _clean_jsdoc(match.group(1))
            return description or None
    return None
