"""Source-side recognizers for the rule engine.

A recognizer matches one line of source-language code and extracts a
language-neutral Construct (kind plus captured values). Emitters render a
Construct in the target language, so every (category, source, target) rule
is the product of the source's recognizers and the target's emitters.

Recognizers run on the code part of a line; trailing comments are split
off by the engine beforehand.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from codeshift_mcp.models.transformation import Language
from codeshift_mcp.utils.text import find_call, leading_whitespace, split_top_level, unwrap_parens

# Rule categories in application order
STRUCTURAL_CATEGORIES: Tuple[str, ...] = (
    "functions",
    "classes",
    "conditionals",
    "loops",
    "exceptions",
    "prints",
    "imports",
    "variables",
)
TOKEN_CATEGORIES: Tuple[str, ...] = ("booleans", "operators", "endings")
CATEGORIES: Tuple[str, ...] = STRUCTURAL_CATEGORIES + TOKEN_CATEGORIES

# Sources whose conditions sit inside mandatory parentheses
_PAREN_CONDITION_SOURCES = frozenset({
    Language.JAVASCRIPT,
    Language.TYPESCRIPT,
    Language.JAVA,
    Language.CPP,
    Language.CSHARP,
    Language.PHP,
})

# Sources that write the parameter type before the name
_TYPE_FIRST_SOURCES = frozenset({Language.JAVA, Language.CPP, Language.CSHARP})

_PRINT_KEYWORD = re.compile(r"^(?:sep|end|file|flush)\s*=")


@dataclass(frozen=True)
class Construct:
    """A recognized source construct.

    Attributes:
        kind: Construct kind, e.g. function, else_if, for_range, print
        indent: Leading whitespace of the source line
        values: Captured values (strings, or lists for params/args/names)
        closes: True when the line starts by closing the previous block
        span: (start, end) of an inline match; None for whole-line matches
    """
    kind: str
    indent: str = ""
    values: Mapping[str, Any] = field(default_factory=dict)
    closes: bool = False
    span: Optional[Tuple[int, int]] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


# =============================================================================
# Value Extraction
# =============================================================================

def _param_names(params: str, source: Language) -> List[str]:
    """Reduce a parameter list to bare names, keeping default values."""
    names = []
    for part in split_top_level(params):
        if not part:
            continue
        head, eq, default = part.partition("=")
        head = head.strip()
        if source in _TYPE_FIRST_SOURCES:
            words = re.findall(r"[A-Za-z_]\w*", head)
            head = words[-1] if words else head
        elif source == Language.GO:
            head = head.split()[0] if head.split() else head
        elif source == Language.PHP:
            sigil = re.search(r"\$(\w+)", head)
            head = sigil.group(1) if sigil else head
        else:
            head = head.split(":")[0].strip().rstrip("?")
            head = re.sub(r"^(?:&\s*)?(?:mut\s+)?", "", head)
        names.append(f"{head} = {default.strip()}" if eq else head)
    return names


def _range_bounds(args: str) -> Optional[Dict[str, str]]:
    parts = split_top_level(args)
    if len(parts) == 1:
        return {"start": "0", "stop": parts[0], "step": "1"}
    if len(parts) == 2:
        return {"start": parts[0], "stop": parts[1], "step": "1"}
    if len(parts) == 3:
        return {"start": parts[0], "stop": parts[1], "step": parts[2]}
    return None


_COUNTED_INIT = re.compile(r"^\s*(?:let|var|const|int|long|size_t|auto|unsigned)?\s*\$?(?P<var>\w+)\s*:?=\s*(?P<start>.+?)\s*$")
_COUNTED_TEST = re.compile(r"^\s*\$?(?P<var>\w+)\s*(?P<op><=|<)\s*(?P<stop>.+?)\s*$")
_COUNTED_UPDATE = re.compile(
    r"^\s*(?:\$?(?P<var>\w+)\s*(?:\+\+|\+=\s*(?P<step>\w+))|\+\+\$?(?P<pre>\w+))\s*$"
)


def _counted_as_range(values: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Recover start/stop/step from a classic counted loop header."""
    init = _COUNTED_INIT.match(values.get("init", ""))
    test = _COUNTED_TEST.match(values.get("test", ""))
    update = _COUNTED_UPDATE.match(values.get("update", ""))
    if not (init and test and update):
        return None
    var = init.group("var")
    if test.group("var") != var or (update.group("var") or update.group("pre")) != var:
        return None
    stop = test.group("stop")
    if test.group("op") == "<=":
        stop = f"{stop} + 1"
    return {"var": var, "start": init.group("start"), "stop": stop, "step": update.group("step") or "1"}


def _print_args(args: str, source: Language) -> Tuple[List[str], bool]:
    """Split print arguments; returns (args, dropped_keywords)."""
    if source == Language.CPP:
        parts = [p.strip() for p in re.split(r"\s*<<\s*", args)]
        return [p for p in parts if p and p not in ('" "', "' '")], False
    parts = [p for p in split_top_level(args) if p]
    if source == Language.RUST and len(parts) > 1 and re.fullmatch(r'"(?:\{\}\s?)+"', parts[0]):
        parts = parts[1:]
    dropped = False
    if source == Language.PYTHON:
        kept = [p for p in parts if not _PRINT_KEYWORD.match(p)]
        dropped = len(kept) != len(parts)
        parts = kept
    return parts, dropped


def _finish(kind: str, values: Dict[str, Any], source: Language) -> Optional[Tuple[str, Dict[str, Any]]]:
    """Post-process captured groups; may refine the kind or reject the match."""
    for key in [k for k in values if k.endswith("2")]:
        values.setdefault(key[:-1], values.pop(key))

    if kind == "function":
        values["name"] = values["name"].rstrip("?!")
        values["params"] = _param_names(values.get("params", ""), source)
    elif kind == "class":
        base = split_top_level(values.get("base", ""))
        base = [b for b in base if b and b not in ("object", "metaclass")]
        if base:
            values["base"] = base[0]
        else:
            values.pop("base", None)
    elif kind in ("if", "else_if", "while"):
        cond = values["cond"].strip()
        if source in _PAREN_CONDITION_SOURCES and "paren" in values:
            if unwrap_parens(f"({cond})") != cond:
                return None
        else:
            cond = unwrap_parens(cond)
        values.pop("paren", None)
        values["cond"] = cond
        if "negate" in values:
            values.pop("negate")
            values["cond"] = f"!({cond})"
    elif kind == "for_range":
        if "range_args" in values:
            bounds = _range_bounds(values.pop("range_args"))
            if bounds is None:
                return None
            values.update(bounds)
        else:
            if "inclusive" in values:
                values.pop("inclusive")
                values["stop"] = f"{values['stop'].strip()} + 1"
            values.setdefault("start", "0")
            values.setdefault("step", "1")
        values["start"] = values["start"].strip()
        values["stop"] = values["stop"].strip()
    elif kind == "for_counted":
        bounds = _counted_as_range(values)
        if bounds is not None:
            return "for_range", bounds
        values = {k: v.strip() for k, v in values.items()}
    elif kind == "for_each":
        values["var"] = values["var"].strip("$ ")
        values["iterable"] = values["iterable"].strip()
    elif kind == "catch":
        if "exc_type" in values:
            values["exc_type"] = values["exc_type"].strip().strip("()")
    elif kind == "print":
        args, dropped = _print_args(values.get("args", ""), source)
        values["args"] = args
        if dropped:
            values["dropped_keywords"] = True
    elif kind == "import_names":
        names = values["names"].strip().strip("()")
        values["names"] = [n.strip() for n in names.split(",") if n.strip()]
    elif kind == "variable":
        values["value"] = values["value"].strip()
    return kind, values


# =============================================================================
# Recognizers
# =============================================================================

class PatternRecognizer:
    """Whole-line recognizer backed by one regex with named groups."""

    def __init__(self, kind: str, pattern: str, source: Language):
        self.kind = kind
        self.pattern = re.compile(pattern)
        self.source = source

    def recognize(self, line: str) -> Optional[Construct]:
        match = self.pattern.match(line)
        if not match:
            return None
        values = {k: v for k, v in match.groupdict().items() if v is not None}
        indent = values.pop("indent", "")
        closes = bool(values.pop("closes", "").strip())
        finished = _finish(self.kind, values, self.source)
        if finished is None:
            return None
        kind, values = finished
        return Construct(kind=kind, indent=indent, values=values, closes=closes)


class CallRecognizer:
    """Inline recognizer for a call with balanced parentheses."""

    def __init__(self, kind: str, callee: str, source: Language):
        self.kind = kind
        self.callee = callee
        self.source = source

    def recognize(self, line: str) -> Optional[Construct]:
        found = find_call(line, self.callee)
        if found is None:
            return None
        start, end, args = found
        finished = _finish(self.kind, {"args": args}, self.source)
        if finished is None:
            return None
        kind, values = finished
        return Construct(kind=kind, indent=leading_whitespace(line), values=values, span=(start, end))


Recognizer = Union[PatternRecognizer, CallRecognizer]

_I = r"^(?P<indent>\s*)"
_C = r"(?P<closes>\}\s*)?"
_ELSE_IF = r"(?:else\s*if|elif|elsif|elseif)"
# Python block headers end in a colon; hybrid input may end them in a brace
_OPEN = r"\s*(?::|\{)$"

# Pattern tables: (category, kind, pattern)
PYTHON_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"(?:async\s+)?def\s+(?P<name>\w+)\s*\((?P<params>.*)\)\s*(?:->\s*[^:{]+)?" + _OPEN),
    ("classes", "class", _I + r"class\s+(?P<name>\w+)\s*(?:\((?P<base>[^)]*)\))?" + _OPEN),
    ("conditionals", "if", _I + r"if\s+(?P<cond>.+?)" + _OPEN),
    ("conditionals", "else_if", _I + _ELSE_IF + r"\s+(?P<cond>.+?)" + _OPEN),
    ("conditionals", "else", _I + r"else" + _OPEN),
    ("conditionals", "pass", _I + r"pass$"),
    ("loops", "for_range", _I + r"for\s+(?P<var>\w+)\s+in\s+range\s*\((?P<range_args>.*)\)" + _OPEN),
    ("loops", "for_each", _I + r"for\s+(?P<var>\w+(?:\s*,\s*\w+)*)\s+in\s+(?P<iterable>.+?)" + _OPEN),
    ("loops", "while", _I + r"while\s+(?P<cond>.+?)" + _OPEN),
    ("exceptions", "try", _I + r"try" + _OPEN),
    ("exceptions", "catch", _I + r"except(?:\s+(?P<exc_type>[\w.]+|\([^)]*\))(?:\s+as\s+(?P<exc_var>\w+))?)?" + _OPEN),
    ("exceptions", "finally", _I + r"finally" + _OPEN),
    ("exceptions", "raise", _I + r"raise\s+(?P<error>[\w.]+)\s*\((?P<message>.*)\)$"),
    ("exceptions", "raise", _I + r"raise\s+(?P<value>\w+)$"),
    ("exceptions", "raise", _I + r"raise$"),
    ("imports", "import_names", _I + r"from\s+(?P<module>[\w.]+)\s+import\s+(?P<names>.+)$"),
    ("imports", "import_module", _I + r"import\s+(?P<module>[\w.]+)(?:\s+as\s+(?P<alias>\w+))?$"),
    ("variables", "variable", _I + r"(?P<name>[A-Za-z_]\w*)\s*(?::\s*[^=]+)?=(?!=)\s*(?P<value>.+)$"),
]

# Shared by the curly-brace languages
_C_CONDITIONALS: List[Tuple[str, str, str]] = [
    ("conditionals", "if", _I + r"if\s*(?P<paren>\()(?P<cond>.*)\)\s*\{?$"),
    ("conditionals", "else_if", _I + _C + _ELSE_IF + r"\s*(?P<paren>\()(?P<cond>.*)\)\s*\{?$"),
    ("conditionals", "else", _I + _C + r"else\s*\{?$"),
]
_C_COUNTED_FOR = ("loops", "for_counted", _I + r"for\s*\((?P<init>[^;]*);(?P<test>[^;]*);(?P<update>[^)]*)\)\s*\{?$")
_C_WHILE = ("loops", "while", _I + r"while\s*(?P<paren>\()(?P<cond>.*)\)\s*\{?$")
_C_TRY = ("exceptions", "try", _I + r"try\s*\{?$")
_C_FINALLY = ("exceptions", "finally", _I + _C + r"finally\s*\{?$")
_C_THROW_NEW = ("exceptions", "raise", _I + r"throw\s+new\s+(?P<error>[\w.\\]+)\s*\((?P<message>.*)\)\s*;?$")
_C_RETHROW = ("exceptions", "raise", _I + r"throw\s+(?P<value>\w+)\s*;?$")
_C_BARE_RETHROW = ("exceptions", "raise", _I + r"throw\s*;?$")
_KEYWORD_GUARD = r"(?!(?:if|else|while|for|foreach|switch|catch|return|new|throw|do|try|function|using)\b)"


def _c_method(modifiers: str) -> str:
    return (
        _I + rf"(?:(?:{modifiers})\s+)+(?:<[^>]+>\s+)?"
        r"(?:(?!class\b|interface\b|enum\b|record\b|struct\b)[\w<>\[\],.?]+\s+)?"
        r"(?P<name>\w+)\s*\((?P<params>[^;]*)\)\s*(?:throws\s+[\w.,\s]+)?\{?$"
    )


JAVASCRIPT_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(?P<name>\w+)\s*(?:<[^>]*>)?\s*\((?P<params>.*)\)\s*(?::\s*[^{]+?)?\s*\{?$"),
    ("functions", "function", _I + r"(?:export\s+)?(?:const|let|var)\s+(?P<name>\w+)\s*=\s*(?:async\s+)?\((?P<params>.*)\)\s*(?::\s*[^=]+?)?\s*=>\s*\{$"),
    ("functions", "function", _I + r"(?:(?:public|private|protected|static|async|readonly)\s+)*" + _KEYWORD_GUARD + r"(?P<name>\w+)\s*\((?P<params>[^;]*)\)\s*(?::\s*[^{]+?)?\s*\{$"),
    ("classes", "class", _I + r"(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+(?P<name>\w+)(?:<[^>]*>)?(?:\s+extends\s+(?P<base>[\w.]+)(?:<[^>]*>)?)?(?:\s+implements\s+[\w.,\s<>]+)?\s*\{?$"),
    *_C_CONDITIONALS,
    _C_COUNTED_FOR,
    ("loops", "for_each", _I + r"for\s*\(\s*(?:const|let|var)\s+(?P<var>\w+|\[[^\]]*\])\s+of\s+(?P<iterable>.+)\)\s*\{?$"),
    _C_WHILE,
    _C_TRY,
    ("exceptions", "catch", _I + _C + r"catch\s*(?:\(\s*(?P<exc_var>\w+)(?:\s*:\s*\w+)?\s*\))?\s*\{?$"),
    _C_FINALLY,
    _C_THROW_NEW,
    ("exceptions", "raise", _I + r"throw\s+(?P<error>[A-Z]\w*)\s*\((?P<message>.*)\)\s*;?$"),
    _C_RETHROW,
    ("imports", "import_names", _I + r"import\s*\{\s*(?P<names>[^}]*)\}\s*from\s*['\"](?P<module>[^'\"]+)['\"]\s*;?$"),
    ("imports", "import_module", _I + r"import\s+(?:\*\s+as\s+)?(?P<alias>\w+)\s+from\s*['\"](?P<module>[^'\"]+)['\"]\s*;?$"),
    ("imports", "import_module", _I + r"(?:const|let|var)\s+(?P<alias>\w+)\s*=\s*require\(\s*['\"](?P<module>[^'\"]+)['\"]\s*\)\s*;?$"),
    ("variables", "variable", _I + r"(?:export\s+)?(?:const|let|var)\s+(?P<name>\w+)\s*(?::\s*[^=]+?)?\s*=(?!=)\s*(?P<value>.+?);?$"),
]

JAVA_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _c_method("public|private|protected|static|final|abstract|synchronized|native")),
    ("functions", "function", _I + _KEYWORD_GUARD + r"[\w<>\[\],.?]+\s+(?P<name>\w+)\s*\((?P<params>[^;]*)\)\s*(?:throws\s+[\w.,\s]+)?\{$"),
    ("classes", "class", _I + r"(?:(?:public|private|protected|abstract|final|static)\s+)*class\s+(?P<name>\w+)(?:<[^>]*>)?(?:\s+extends\s+(?P<base>[\w.]+)(?:<[^>]*>)?)?(?:\s+implements\s+[\w.,\s<>]+)?\s*\{?$"),
    *_C_CONDITIONALS,
    _C_COUNTED_FOR,
    ("loops", "for_each", _I + r"for\s*\(\s*(?:final\s+)?[\w<>\[\],.?]+\s+(?P<var>\w+)\s*:\s*(?P<iterable>.+)\)\s*\{?$"),
    _C_WHILE,
    _C_TRY,
    ("exceptions", "catch", _I + _C + r"catch\s*\(\s*(?:final\s+)?(?P<exc_type>[\w.|\s]+?)\s+(?P<exc_var>\w+)\s*\)\s*\{?$"),
    _C_FINALLY,
    _C_THROW_NEW,
    _C_RETHROW,
    ("imports", "import_module", _I + r"import\s+(?:static\s+)?(?P<module>[\w.]+)\.\*\s*;?$"),
    ("imports", "import_names", _I + r"import\s+(?:static\s+)?(?P<module>[\w.]+)\.(?P<names>\w+)\s*;?$"),
    ("variables", "variable", _I + r"(?:final\s+)?(?:var|int|long|double|float|boolean|char|byte|short|[A-Z]\w*(?:<[^=]*>)?(?:\[\])*)\s+(?P<name>\w+)\s*=(?!=)\s*(?P<value>.+?);?$"),
]

CPP_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"(?:(?:static|inline|virtual|constexpr|explicit)\s+)*" + _KEYWORD_GUARD + r"[\w:<>,]+(?:\s*[*&]+\s*|\s+)(?P<name>\w+)\s*\((?P<params>[^;]*)\)\s*(?:const\s*)?(?:override\s*)?\{$"),
    ("classes", "class", _I + r"(?:class|struct)\s+(?P<name>\w+)(?:\s*:\s*(?:public|protected|private)?\s*(?P<base>[\w:]+))?\s*\{?$"),
    *_C_CONDITIONALS,
    _C_COUNTED_FOR,
    ("loops", "for_each", _I + r"for\s*\(\s*(?:const\s+)?[\w:<>]+\s*[&*]*\s*(?P<var>\w+)\s*:\s*(?P<iterable>.+)\)\s*\{?$"),
    _C_WHILE,
    _C_TRY,
    ("exceptions", "catch", _I + _C + r"catch\s*\(\s*(?:const\s+)?(?P<exc_type>[\w:]+|\.\.\.)\s*&?\s*(?P<exc_var>\w+)?\s*\)\s*\{?$"),
    ("exceptions", "raise", _I + r"throw\s+(?P<error>[\w:]+)\s*\((?P<message>.*)\)\s*;?$"),
    _C_RETHROW,
    _C_BARE_RETHROW,
    ("prints", "print", _I + r"(?:std::)?cout\s*<<\s*(?P<args>.+?)(?:\s*<<\s*(?:std::)?endl)?\s*;?$"),
    ("imports", "import_module", _I + r"#include\s*[<\"](?P<module>[^>\"]+)[>\"]$"),
    ("variables", "variable", _I + r"(?:const\s+)?(?:auto|int|long|double|float|bool|char|size_t|std::\w+(?:<[^=]*>)?|[A-Z]\w*)\s*[*&]?\s+(?P<name>\w+)\s*=(?!=)\s*(?P<value>.+?);?$"),
]

CSHARP_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _c_method("public|private|protected|internal|static|virtual|override|async|abstract|sealed|extern")),
    ("classes", "class", _I + r"(?:(?:public|private|protected|internal|abstract|sealed|static|partial)\s+)*class\s+(?P<name>\w+)(?:<[^>]*>)?(?:\s*:\s*(?P<base>[\w.]+)(?:<[^>]*>)?(?:\s*,\s*[\w.<>]+)*)?\s*\{?$"),
    *_C_CONDITIONALS,
    _C_COUNTED_FOR,
    ("loops", "for_each", _I + r"foreach\s*\(\s*[\w<>\[\],.?]+\s+(?P<var>\w+)\s+in\s+(?P<iterable>.+)\)\s*\{?$"),
    _C_WHILE,
    _C_TRY,
    ("exceptions", "catch", _I + _C + r"catch(?:\s*\(\s*(?P<exc_type>[\w.]+)(?:\s+(?P<exc_var>\w+))?\s*\))?\s*\{?$"),
    _C_FINALLY,
    _C_THROW_NEW,
    _C_RETHROW,
    _C_BARE_RETHROW,
    ("imports", "import_module", _I + r"using\s+(?:static\s+)?(?P<module>[\w.]+)\s*;?$"),
    ("variables", "variable", _I + r"(?:var|int|long|double|float|bool|string|char|decimal|object|[A-Z]\w*(?:<[^=]*>)?(?:\[\])*)\s+(?P<name>\w+)\s*=(?!=)\s*(?P<value>.+?);?$"),
]

GO_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"func\s+(?:\([^)]*\)\s*)?(?P<name>\w+)\s*\((?P<params>[^)]*)\)[^{]*?\{?$"),
    ("classes", "class", _I + r"type\s+(?P<name>\w+)\s+struct\s*\{?$"),
    ("conditionals", "if", _I + r"if\s+(?P<cond>.+?)\s*\{$"),
    ("conditionals", "else_if", _I + _C + _ELSE_IF + r"\s+(?P<cond>.+?)\s*\{$"),
    ("conditionals", "else", _I + _C + r"else\s*\{?$"),
    ("loops", "for_counted", _I + r"for\s+(?P<init>[^;{]*);(?P<test>[^;{]*);(?P<update>[^{]*?)\s*\{$"),
    ("loops", "for_each", _I + r"for\s+(?:\w+\s*,\s*)?(?P<var>\w+)\s*:=\s*range\s+(?P<iterable>.+?)\s*\{$"),
    ("loops", "while", _I + r"for\s+(?P<cond>[^;{]+?)\s*\{$"),
    ("loops", "while", _I + r"for\s*(?P<cond>)\{$"),
    ("exceptions", "raise", _I + r"panic\((?P<message>.*)\)$"),
    ("imports", "import_module", _I + r"import\s+(?:(?P<alias>\w+)\s+)?\"(?P<module>[^\"]+)\"$"),
    ("variables", "variable", _I + r"(?P<name>\w+)\s*:=\s*(?P<value>.+)$"),
    ("variables", "variable", _I + r"var\s+(?P<name>\w+)(?:\s+[\w\[\]*.]+)?\s*=(?!=)\s*(?P<value>.+)$"),
]

RUST_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?fn\s+(?P<name>\w+)\s*(?:<[^>]*>)?\s*\((?P<params>.*)\)\s*(?:->\s*[^{]+?)?\s*\{?$"),
    ("classes", "class", _I + r"(?:pub\s+)?struct\s+(?P<name>\w+)\s*(?:<[^>]*>)?\s*\{?$"),
    ("conditionals", "if", _I + r"if\s+(?P<cond>.+?)\s*\{$"),
    ("conditionals", "else_if", _I + _C + _ELSE_IF + r"\s+(?P<cond>.+?)\s*\{$"),
    ("conditionals", "else", _I + _C + r"else\s*\{?$"),
    ("loops", "for_range", _I + r"for\s+(?P<var>\w+)\s+in\s+\(?(?P<start>[^.{]+?)\.\.(?P<inclusive>=)?(?P<stop>[^.{)]+?)\)?\s*\{$"),
    ("loops", "for_each", _I + r"for\s+(?P<var>\w+)\s+in\s+(?P<iterable>.+?)\s*\{$"),
    ("loops", "while", _I + r"while\s+(?P<cond>.+?)\s*\{$"),
    ("loops", "while", _I + r"loop\s*(?P<cond>)\{$"),
    ("exceptions", "raise", _I + r"panic!\((?P<message>.*)\)\s*;?$"),
    ("imports", "import_names", _I + r"use\s+(?P<module>[\w:]+)::\{(?P<names>[^}]*)\}\s*;?$"),
    ("imports", "import_module", _I + r"use\s+(?P<module>[\w:]+)\s*;?$"),
    ("variables", "variable", _I + r"let\s+(?:mut\s+)?(?P<name>\w+)\s*(?::\s*[^=]+?)?\s*=(?!=)\s*(?P<value>.+?);?$"),
]

PHP_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"(?:(?:public|private|protected|static|abstract|final)\s+)*function\s+&?(?P<name>\w+)\s*\((?P<params>.*)\)\s*(?::\s*\??[\w\\]+)?\s*\{?$"),
    ("classes", "class", _I + r"(?:(?:abstract|final)\s+)?class\s+(?P<name>\w+)(?:\s+extends\s+(?P<base>[\w\\]+))?(?:\s+implements\s+[\w\\,\s]+)?\s*\{?$"),
    *_C_CONDITIONALS,
    _C_COUNTED_FOR,
    ("loops", "for_each", _I + r"foreach\s*\(\s*(?P<iterable>.+?)\s+as\s+(?:\$\w+\s*=>\s*)?\$(?P<var>\w+)\s*\)\s*\{?$"),
    _C_WHILE,
    _C_TRY,
    ("exceptions", "catch", _I + _C + r"catch\s*\(\s*(?P<exc_type>[\w\\|]+)\s+\$(?P<exc_var>\w+)\s*\)\s*\{?$"),
    _C_FINALLY,
    _C_THROW_NEW,
    ("prints", "print", _I + r"(?:echo|print)\s+(?P<args>.+?);?$"),
    ("imports", "prologue", _I + r"<\?php$"),
    ("imports", "import_module", _I + r"(?:require|require_once|include|include_once)\s*\(?\s*['\"](?P<module>[^'\"]+)['\"]\s*\)?\s*;?$"),
    ("imports", "import_names", _I + r"use\s+(?P<module>[\w\\]+)\\(?P<names>\w+)\s*;?$"),
    ("variables", "variable", _I + r"\$(?P<name>\w+)\s*=(?![=>])\s*(?P<value>.+?);?$"),
]

RUBY_PATTERNS: List[Tuple[str, str, str]] = [
    ("functions", "function", _I + r"def\s+(?:self\.)?(?P<name>\w+[?!]?)\s*(?:\((?P<params>.*)\))?$"),
    ("classes", "class", _I + r"class\s+(?P<name>\w+)(?:\s*<\s*(?P<base>[\w:]+))?$"),
    ("conditionals", "if", _I + r"if\s+(?P<cond>.+?)(?:\s+then)?$"),
    ("conditionals", "if", _I + r"unless\s+(?P<cond>.+?)(?:\s+then)?(?P<negate>)$"),
    ("conditionals", "else_if", _I + _ELSE_IF + r"\s+(?P<cond>.+?)(?:\s+then)?$"),
    ("conditionals", "else", _I + r"else$"),
    ("conditionals", "block_end", _I + r"end$"),
    ("loops", "for_range", _I + r"(?P<stop>\w+)\.times\s+do\s*\|(?P<var>\w+)\|$"),
    ("loops", "for_range", _I + r"for\s+(?P<var>\w+)\s+in\s+\(?(?P<start>[^.]+?)\.\.(?P<stop>[^.)]+?)\)?(?:\s+do)?(?P<inclusive>)$"),
    ("loops", "for_range", _I + r"\((?P<start>[^.]+?)\.\.\.(?P<stop>[^.)]+?)\)\.each\s+do\s*\|(?P<var>\w+)\|$"),
    ("loops", "for_each", _I + r"(?P<iterable>[\w.\[\]()@]+)\.each\s+do\s*\|(?P<var>\w+)\|$"),
    ("loops", "for_each", _I + r"for\s+(?P<var>\w+)\s+in\s+(?P<iterable>.+?)(?:\s+do)?$"),
    ("loops", "while", _I + r"while\s+(?P<cond>.+?)(?:\s+do)?$"),
    ("loops", "while", _I + r"until\s+(?P<cond>.+?)(?:\s+do)?(?P<negate>)$"),
    ("exceptions", "try", _I + r"begin$"),
    ("exceptions", "catch", _I + r"rescue(?:\s+(?P<exc_type>[\w:]+))?(?:\s*=>\s*(?P<exc_var>\w+))?$"),
    ("exceptions", "finally", _I + r"ensure$"),
    ("exceptions", "raise", _I + r"raise\s+(?P<error>[A-Z][\w:]*)\.new\((?P<message>.*)\)$"),
    ("exceptions", "raise", _I + r"raise\s+(?P<error>[A-Z][\w:]*)(?:\s*,\s*(?P<message2>.+))?$"),
    ("exceptions", "raise", _I + r"raise\s+(?P<message>['\"].*)$"),
    ("exceptions", "raise", _I + r"raise$"),
    ("prints", "print", _I + r"puts\s+(?P<args>[^(].*)$"),
    ("imports", "import_module", _I + r"require(?:_relative)?\s*\(?\s*['\"](?P<module>[^'\"]+)['\"]\s*\)?$"),
    ("variables", "variable", _I + r"(?P<name>[a-z_]\w*)\s*=(?![=~>])\s*(?P<value>.+)$"),
]

# Output calls recognized inline: (source, callee regex)
PRINT_CALLEES: List[Tuple[Language, str]] = [
    (Language.PYTHON, r"print"),
    (Language.JAVASCRIPT, r"console\.log"),
    (Language.TYPESCRIPT, r"console\.log"),
    (Language.JAVA, r"System\.out\.println"),
    (Language.CSHARP, r"Console\.WriteLine"),
    (Language.GO, r"fmt\.Println"),
    (Language.RUST, r"println!"),
    (Language.RUBY, r"puts"),
]

PATTERN_TABLES: Mapping[Language, List[Tuple[str, str, str]]] = MappingProxyType({
    Language.PYTHON: PYTHON_PATTERNS,
    Language.JAVASCRIPT: JAVASCRIPT_PATTERNS,
    Language.TYPESCRIPT: JAVASCRIPT_PATTERNS,
    Language.JAVA: JAVA_PATTERNS,
    Language.CPP: CPP_PATTERNS,
    Language.CSHARP: CSHARP_PATTERNS,
    Language.GO: GO_PATTERNS,
    Language.RUST: RUST_PATTERNS,
    Language.PHP: PHP_PATTERNS,
    Language.RUBY: RUBY_PATTERNS,
})


def _build_recognizers() -> Mapping[Tuple[str, Language], Tuple[Recognizer, ...]]:
    table: Dict[Tuple[str, Language], List[Recognizer]] = {}
    for source, patterns in PATTERN_TABLES.items():
        for category, kind, pattern in patterns:
            table.setdefault((category, source), []).append(PatternRecognizer(kind, pattern, source))
    for source, callee in PRINT_CALLEES:
        table.setdefault(("prints", source), []).insert(0, CallRecognizer("print", callee, source))
    return MappingProxyType({key: tuple(value) for key, value in table.items()})


RECOGNIZERS = _build_recognizers()


def recognizers_for(category: str, source: Language) -> Tuple[Recognizer, ...]:
    """Recognizers for one category and source, in match order."""
    return RECOGNIZERS.get((category, source), ())

