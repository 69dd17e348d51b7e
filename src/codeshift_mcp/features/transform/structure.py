"""Best-effort structural summary.

Builds a shallow tree of recognized constructs in one top-to-bottom scan.
Nesting follows indentation depth through an explicit stack of open
nodes; there is no block matching, so irregular indentation can attach a
node to the wrong parent.
"""

import re
from typing import List, Optional, Pattern, Tuple, Union

from codeshift_mcp.features.transform.registry import LanguageSpec, get_language_spec
from codeshift_mcp.models.transformation import Language, StructuralNode
from codeshift_mcp.utils.text import leading_whitespace

# (node type, pattern); the first group named "name" is used when present
_NODE_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("import", re.compile(
        r"^(?:import\b|from\s+[\w.]+\s+import\b|#include\b|using\s+[\w.]+\s*;|use\s+[\w:\\]+"
        r"|require(?:_relative|_once)?\b|(?:const|let|var)\s+\w+\s*=\s*require\()"
    )),
    ("class", re.compile(
        r"^(?:(?:export|default|public|private|protected|internal|abstract|final|static|sealed|partial|pub)\s+)*"
        r"(?:class|struct|interface|trait|enum|module|impl)\s+(?P<name>\w+)"
    )),
    ("class", re.compile(r"^type\s+(?P<name>\w+)\s+(?:struct|interface)\b")),
    ("function", re.compile(
        r"^(?:(?:export|default|async|pub|public|private|protected|internal|static|override|virtual)\s+)*"
        r"(?:def|function|func|fn)\s*(?:\([^)]*\)\s*)?\*?\s*(?P<name>\w+)"
    )),
    ("function", re.compile(r"^(?:const|let|var)\s+(?P<name>\w+)\s*=\s*(?:async\s+)?(?:\([^)]*\)|\w+)\s*=>")),
    ("function", re.compile(
        r"^(?:(?:public|private|protected|internal|static|final|abstract|override|virtual|async|synchronized)\s+)+"
        r"(?:[\w<>\[\],.?]+\s+)?(?P<name>\w+)\s*\([^;]*\)\s*(?:throws\s+[\w.,\s]+)?\{?$"
    )),
    ("if", re.compile(r"^(?:\}\s*)?(?:if|elif|elsif|elseif|else|unless|switch|case|match)\b")),
    ("for", re.compile(r"^(?:for|foreach)\b|\.each\b.*\bdo\b|\.times\s+do\b")),
    ("while", re.compile(r"^(?:while|until|loop|do)\b")),
    ("block", re.compile(r"^(?:\}\s*)?(?:try|catch|except|finally|begin|rescue|ensure)\b|^[{}]")),
    ("variable", re.compile(
        r"^(?:(?:const|let|var|val|mut|final|static|auto|int|long|float|double|bool|boolean|string|String|char)\s+)+"
        r"\$?(?P<name>\w+)\b"
    )),
    ("variable", re.compile(r"^\$?(?P<name>[A-Za-z_]\w*)\s*(?::=|(?::\s*[^=]+)?=(?!=))")),
]

_CLOSER = re.compile(r"^(?:\}[\s;),]*|end)$")

LanguageRef = Union[Language, str, None]


def _classify(trimmed: str, spec: LanguageSpec) -> Tuple[str, Optional[str]]:
    if spec.is_comment(trimmed):
        return "comment", None
    for node_type, pattern in _NODE_PATTERNS:
        match = pattern.search(trimmed)
        if match:
            name = match.groupdict().get("name")
            return node_type, name
    return "statement", None


def build_structural_summary(code: str, language: LanguageRef = None) -> List[StructuralNode]:
    """Build a structural summary of code.

    Args:
        code: Source text in any registered language
        language: Language of the text; unknown identifiers fall back to
            the default language

    Returns:
        Top-level nodes in source order; line numbers are 0-indexed
    """
    spec = get_language_spec(language)
    roots: List[StructuralNode] = []
    # Open nodes with the indentation width of their first line
    stack: List[Tuple[int, StructuralNode]] = []

    for index, line in enumerate(code.split("\n")):
        trimmed = line.strip()
        if not trimmed:
            continue
        width = len(leading_whitespace(line))

        while stack and stack[-1][0] > width:
            stack.pop()

        if _CLOSER.match(trimmed) and stack and stack[-1][0] == width:
            _extend(stack, index)
            stack.pop()
            continue

        while stack and stack[-1][0] >= width:
            stack.pop()

        node_type, name = _classify(trimmed, spec)
        node = StructuralNode(type=node_type, name=name, line_start=index, line_end=index, content=trimmed)
        if stack:
            stack[-1][1].children.append(node)
            _extend(stack, index)
        else:
            roots.append(node)
        stack.append((width, node))

    return roots


def _extend(stack: List[Tuple[int, StructuralNode]], index: int) -> None:
    for _, open_node in stack:
        open_node.line_end = max(open_node.line_end, index)


def flatten(nodes: List[StructuralNode]) -> List[StructuralNode]:
    """Depth-first list of every node in a summary."""
    result: List[StructuralNode] = []
    for node in nodes:
        result.append(node)
        result.extend(flatten(node.children))
    return result
