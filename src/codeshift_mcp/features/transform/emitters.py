"""Target-side emitters for the rule engine.

An emitter renders a recognized Construct in one target language. Emitters
return the rewritten text without indentation; the engine re-applies the
source line's indentation or splices inline matches back into the line.

A (kind, target) pair with no emitter is a pass-unchanged rewrite with a
warning, never an error.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

from codeshift_mcp.features.transform.recognizers import Construct
from codeshift_mcp.features.transform.registry import LanguageSpec
from codeshift_mcp.models.transformation import Language


@dataclass(frozen=True)
class Emission:
    """Rendered target text plus any substitution warnings."""
    text: str
    warnings: Tuple[str, ...] = ()


@dataclass
class RuleContext:
    """Per-call left context shared by the rules of one transformation.

    Attributes:
        source: Source language spec
        target: Target language spec
        declared: Names already bound earlier in the input
        catch_var: Name bound by the most recent catch clause
    """
    source: LanguageSpec
    target: LanguageSpec
    declared: Set[str] = field(default_factory=set)
    catch_var: str = "e"


Emitter = Callable[[Construct, RuleContext], Emission]

_BRACE_TARGETS = (
    Language.JAVASCRIPT,
    Language.TYPESCRIPT,
    Language.JAVA,
    Language.CPP,
    Language.CSHARP,
    Language.GO,
    Language.RUST,
    Language.PHP,
)
_PAREN_TARGETS = frozenset(_BRACE_TARGETS) - {Language.GO, Language.RUST}


# =============================================================================
# Shared Helpers
# =============================================================================

_NO_TERMINATOR_ENDINGS = (
    "{", "}", ";", ",", ":", "(", "[", "\\", "+", "-", "*", "/", "=", "&&", "||", ".", "?", "|", "&",
)
_NO_TERMINATOR_STARTS = ("#", "<?php", "@", "//", "/*", "*")
_CONTINUATION_WORDS = ("else", "do", "try", "finally")
_UNTERMINATED_HEADER = re.compile(
    r"^(?:\}\s*)?(?:if|else|for|foreach|while|switch|catch|function|fn|func|class|struct|interface"
    r"|namespace|enum|impl|trait)\b"
)
_MODIFIER_HEADER = re.compile(r"^(?:(?:public|private|protected|internal|static)\s+)+[^=]*\)$")


def needs_terminator(code: str) -> bool:
    """True when a line of target code should get a statement terminator."""
    trimmed = code.strip()
    if not trimmed or trimmed.startswith(_NO_TERMINATOR_STARTS):
        return False
    if trimmed.endswith(("++", "--")):
        return True
    if trimmed.endswith(_NO_TERMINATOR_ENDINGS):
        return False
    if trimmed in _CONTINUATION_WORDS or trimmed.endswith(tuple(" " + w for w in _CONTINUATION_WORDS)):
        return False
    if _UNTERMINATED_HEADER.match(trimmed) or _MODIFIER_HEADER.match(trimmed):
        return False
    return True


def _terminate(text: str, target: LanguageSpec) -> str:
    if target.terminator and needs_terminator(text):
        return text + target.terminator
    return text


def _block(header: str, target: LanguageSpec) -> str:
    """Attach the target's block opener to a header."""
    if target.language == Language.PYTHON:
        return header + ":"
    if target.language == Language.RUBY:
        return header
    return header + " {"


def _closing(construct: Construct, ctx: RuleContext) -> str:
    """Prefix that closes the previous block on continuation lines."""
    if ctx.target.uses_braces and (construct.closes or not ctx.source.uses_braces):
        return "} "
    return ""


def _condition(keyword: str, cond: str, target: LanguageSpec) -> str:
    if target.language in _PAREN_TARGETS:
        return _block(f"{keyword} ({cond})", target)
    return _block(f"{keyword} {cond}", target)


def _var(name: str, target: LanguageSpec) -> str:
    return f"${name}" if target.language == Language.PHP else name


# =============================================================================
# Functions and Classes
# =============================================================================

_FUNCTION_TEMPLATES: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "def {name}({params})",
    Language.JAVASCRIPT: "function {name}({params})",
    Language.TYPESCRIPT: "function {name}({params})",
    Language.JAVA: "public static Object {name}({params})",
    Language.CPP: "void {name}({params})",
    Language.CSHARP: "public static object {name}({params})",
    Language.GO: "func {name}({params})",
    Language.RUST: "fn {name}({params})",
    Language.PHP: "function {name}({params})",
    Language.RUBY: "def {name}({params})",
})

# Placeholder types for parameters in typed targets
_PARAM_FORMATS: Mapping[Language, str] = MappingProxyType({
    Language.JAVA: "Object {}",
    Language.CSHARP: "object {}",
    Language.CPP: "auto {}",
    Language.GO: "{} interface{{}}",
    Language.PHP: "${}",
})
_NO_DEFAULT_PARAMS = frozenset({Language.JAVA, Language.GO, Language.RUST})


def _render_params(names: List[str], target: LanguageSpec) -> Tuple[str, List[str]]:
    warnings = []
    if target.language != Language.PYTHON and names and names[0] in ("self", "cls"):
        names = names[1:]
    rendered = []
    for param in names:
        name, eq, default = param.partition(" = ")
        if eq and target.language in _NO_DEFAULT_PARAMS:
            warnings.append(f"{target.display_name} has no default parameter values, dropped default for '{name}'")
            eq = ""
        text = _PARAM_FORMATS.get(target.language, "{}").format(name)
        rendered.append(f"{text} = {default}" if eq else text)
    return ", ".join(rendered), warnings


def emit_function(construct: Construct, ctx: RuleContext) -> Emission:
    params, warnings = _render_params(list(construct.get("params", [])), ctx.target)
    header = _FUNCTION_TEMPLATES[ctx.target.language].format(name=construct.get("name"), params=params)
    if ctx.target.language == Language.RUBY and not params:
        header = f"def {construct.get('name')}"
    return Emission(_block(header, ctx.target), tuple(warnings))


# (without base, with base)
_CLASS_TEMPLATES: Mapping[Language, Tuple[str, str]] = MappingProxyType({
    Language.PYTHON: ("class {name}", "class {name}({base})"),
    Language.JAVASCRIPT: ("class {name}", "class {name} extends {base}"),
    Language.TYPESCRIPT: ("class {name}", "class {name} extends {base}"),
    Language.JAVA: ("public class {name}", "public class {name} extends {base}"),
    Language.CPP: ("class {name}", "class {name} : public {base}"),
    Language.CSHARP: ("public class {name}", "public class {name} : {base}"),
    Language.PHP: ("class {name}", "class {name} extends {base}"),
    Language.RUBY: ("class {name}", "class {name} < {base}"),
})

# Targets without classes: (header, substitution warning)
_STRUCT_SUBSTITUTES: Mapping[Language, Tuple[str, str]] = MappingProxyType({
    Language.GO: ("type {name} struct", "Go has no classes, using struct instead"),
    Language.RUST: ("struct {name}", "Rust has no classes, using struct instead"),
})


def emit_class(construct: Construct, ctx: RuleContext) -> Emission:
    name = construct.get("name")
    base = construct.get("base")
    target = ctx.target
    if target.language in _STRUCT_SUBSTITUTES:
        template, warning = _STRUCT_SUBSTITUTES[target.language]
        warnings = [warning]
        if base:
            warnings.append(f"{target.display_name} has no inheritance, dropped base class '{base}'")
        return Emission(_block(template.format(name=name), target), tuple(warnings))
    plain, with_base = _CLASS_TEMPLATES[target.language]
    template = with_base if base else plain
    return Emission(_block(template.format(name=name, base=base), target))


# =============================================================================
# Conditionals
# =============================================================================

def emit_if(construct: Construct, ctx: RuleContext) -> Emission:
    return Emission(_condition("if", construct.get("cond"), ctx.target))


def emit_else_if(construct: Construct, ctx: RuleContext) -> Emission:
    header = _condition(ctx.target.else_if_keyword, construct.get("cond"), ctx.target)
    return Emission(_closing(construct, ctx) + header)


def emit_else(construct: Construct, ctx: RuleContext) -> Emission:
    return Emission(_closing(construct, ctx) + _block("else", ctx.target))


def emit_block_end(construct: Construct, ctx: RuleContext) -> Emission:
    return Emission(ctx.target.block_close or "}")


def emit_pass(construct: Construct, ctx: RuleContext) -> Emission:
    if ctx.target.language == Language.PYTHON:
        return Emission("pass")
    return Emission(f"{ctx.target.line_comment} pass")


# =============================================================================
# Loops
# =============================================================================

_COUNTED_DECLARATIONS: Mapping[Language, str] = MappingProxyType({
    Language.JAVASCRIPT: "let ",
    Language.TYPESCRIPT: "let ",
    Language.JAVA: "int ",
    Language.CPP: "int ",
    Language.CSHARP: "int ",
    Language.PHP: "",
})


def _counted_parts(var: str, stop: str, step: str) -> Tuple[str, str]:
    """Comparison operator and update expression for a counted loop."""
    if step.startswith("-"):
        amount = step[1:].strip()
        return ">", f"{var}--" if amount == "1" else f"{var} -= {amount}"
    return "<", f"{var}++" if step == "1" else f"{var} += {step}"


def emit_for_range(construct: Construct, ctx: RuleContext) -> Emission:
    var = construct.get("var")
    start, stop, step = construct.get("start"), construct.get("stop"), construct.get("step", "1")
    language = ctx.target.language

    if language == Language.PYTHON:
        if step != "1":
            args = f"{start}, {stop}, {step}"
        elif start != "0":
            args = f"{start}, {stop}"
        else:
            args = stop
        return Emission(f"for {var} in range({args}):")
    if language == Language.RUBY:
        if step == "1":
            header = f"{stop}.times do |{var}|" if start == "0" else f"({start}...{stop}).each do |{var}|"
        else:
            header = f"{start}.step({stop}, {step}) do |{var}|"
        return Emission(header)
    if language == Language.RUST:
        if step.startswith("-"):
            amount = step[1:].strip()
            span = f"({stop} + 1..={start}).rev()"
            span = span if amount == "1" else f"{span}.step_by({amount})"
        elif step == "1":
            span = f"{start}..{stop}"
        else:
            span = f"({start}..{stop}).step_by({step})"
        return Emission(f"for {var} in {span} {{")

    compare, update = _counted_parts(_var(var, ctx.target), stop, step)
    if language == Language.GO:
        return Emission(f"for {var} := {start}; {var} {compare} {stop}; {update} {{")
    decl = _COUNTED_DECLARATIONS[language]
    name = _var(var, ctx.target)
    return Emission(f"for ({decl}{name} = {start}; {name} {compare} {stop}; {update}) {{")


_FOR_EACH_TEMPLATES: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "for {var} in {iterable}:",
    Language.JAVASCRIPT: "for (let {var} of {iterable}) {{",
    Language.TYPESCRIPT: "for (const {var} of {iterable}) {{",
    Language.JAVA: "for (Object {var} : {iterable}) {{",
    Language.CPP: "for (auto {var} : {iterable}) {{",
    Language.CSHARP: "foreach (var {var} in {iterable}) {{",
    Language.GO: "for _, {var} := range {iterable} {{",
    Language.RUST: "for {var} in {iterable} {{",
    Language.PHP: "foreach ({iterable} as {var}) {{",
    Language.RUBY: "{iterable}.each do |{var}|",
})

# Loop-variable destructuring, where the target has it
_DESTRUCTURED_VARS: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "{names}",
    Language.RUBY: "{names}",
    Language.JAVASCRIPT: "[{names}]",
    Language.TYPESCRIPT: "[{names}]",
    Language.CPP: "[{names}]",
    Language.PHP: "[{names}]",
    Language.CSHARP: "({names})",
    Language.RUST: "({names})",
})


def emit_for_each(construct: Construct, ctx: RuleContext) -> Emission:
    target = ctx.target
    iterable = construct.get("iterable")
    names = [_var(name.strip(), target) for name in construct.get("var").split(",")]
    if len(names) == 1:
        return Emission(_FOR_EACH_TEMPLATES[target.language].format(var=names[0], iterable=iterable))

    joined = ", ".join(names)
    if target.language == Language.GO and len(names) == 2:
        return Emission(f"for {joined} := range {iterable} {{")
    if target.language in _DESTRUCTURED_VARS:
        var = _DESTRUCTURED_VARS[target.language].format(names=joined)
        return Emission(_FOR_EACH_TEMPLATES[target.language].format(var=var, iterable=iterable))
    warning = f"{target.display_name} cannot destructure loop variables; '{joined}' left as written"
    return Emission(_FOR_EACH_TEMPLATES[target.language].format(var=joined, iterable=iterable), (warning,))


def emit_for_counted(construct: Construct, ctx: RuleContext) -> Emission:
    init, test, update = construct.get("init"), construct.get("test"), construct.get("update")
    if ctx.target.language == Language.GO:
        return Emission(f"for {init}; {test}; {update} {{")
    return Emission(f"for ({init}; {test}; {update}) {{")


def emit_while(construct: Construct, ctx: RuleContext) -> Emission:
    cond = construct.get("cond") or ctx.target.true_literal
    if ctx.target.language == Language.GO:
        return Emission(f"for {cond} {{")
    return Emission(_condition("while", cond, ctx.target))


# =============================================================================
# Exceptions
# =============================================================================

_GENERIC_EXCEPTIONS = frozenset({"Exception", "Error", "std::exception", "StandardError", "\\Exception"})

_GENERIC_CATCH_TYPES: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "Exception",
    Language.JAVA: "Exception",
    Language.CSHARP: "Exception",
    Language.CPP: "std::exception",
    Language.PHP: "Exception",
    Language.RUBY: "StandardError",
})

_GENERIC_RAISE_TYPES: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "Exception",
    Language.JAVASCRIPT: "Error",
    Language.TYPESCRIPT: "Error",
    Language.JAVA: "RuntimeException",
    Language.CSHARP: "Exception",
    Language.CPP: "std::runtime_error",
    Language.PHP: "Exception",
    Language.RUBY: "RuntimeError",
})


def emit_try(construct: Construct, ctx: RuleContext) -> Emission:
    if ctx.target.language == Language.RUBY:
        return Emission("begin")
    return Emission(_block("try", ctx.target))


def emit_catch(construct: Construct, ctx: RuleContext) -> Emission:
    language = ctx.target.language
    exc_type = construct.get("exc_type")
    if exc_type in _GENERIC_EXCEPTIONS or exc_type == "...":
        exc_type = None
    var = construct.get("exc_var")
    if var:
        ctx.catch_var = var
    bound = var or ctx.catch_var

    if language == Language.PYTHON:
        if exc_type or var:
            header = f"except {exc_type or _GENERIC_CATCH_TYPES[language]}"
            header = f"{header} as {var}" if var else header
        else:
            header = "except"
        return Emission(header + ":")
    if language == Language.RUBY:
        header = "rescue"
        if exc_type:
            header = f"{header} {exc_type}"
        if var:
            header = f"{header} => {var}"
        return Emission(header)

    prefix = _closing(construct, ctx)
    if language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        return Emission(f"{prefix}catch ({bound}) {{")
    exc_type = exc_type or _GENERIC_CATCH_TYPES[language]
    if language == Language.CPP:
        return Emission(f"{prefix}catch (const {exc_type}& {bound}) {{")
    return Emission(f"{prefix}catch ({exc_type} {_var(bound, ctx.target)}) {{")


def emit_finally(construct: Construct, ctx: RuleContext) -> Emission:
    if ctx.target.language == Language.RUBY:
        return Emission("ensure")
    return Emission(_closing(construct, ctx) + _block("finally", ctx.target))


def _panic_payload(construct: Construct, ctx: RuleContext) -> str:
    message = construct.get("message")
    if message:
        return message
    if construct.get("value"):
        return construct.get("value")
    if construct.get("error"):
        return f'"{construct.get("error")}"'
    return ctx.catch_var


def emit_raise(construct: Construct, ctx: RuleContext) -> Emission:
    language = ctx.target.language
    value = construct.get("value")
    error = construct.get("error")
    message = construct.get("message", "")

    if language == Language.GO:
        return Emission(f"panic({_panic_payload(construct, ctx)})")
    if language == Language.RUST:
        payload = _panic_payload(construct, ctx)
        if not payload.startswith('"'):
            payload = f'"{{}}", {payload}'
        return Emission(f"panic!({payload})")

    if error is None and value is None and "message" not in construct.values:
        if language in (Language.PYTHON, Language.RUBY):
            return Emission("raise")
        if language == Language.CPP:
            return Emission("throw")
        return Emission(f"throw {_var(ctx.catch_var, ctx.target)}")
    if value is not None:
        keyword = "raise" if language in (Language.PYTHON, Language.RUBY) else "throw"
        return Emission(f"{keyword} {_var(value, ctx.target)}")

    if error is None or error in _GENERIC_EXCEPTIONS or (error == "RuntimeError" and language != Language.PYTHON):
        error = _GENERIC_RAISE_TYPES[language]
    if language == Language.PYTHON:
        return Emission(f"raise {error}({message})")
    if language == Language.RUBY:
        return Emission(f"raise {error}, {message}" if message else f"raise {error}")
    if language == Language.CPP:
        return Emission(f"throw {error}({message})")
    return Emission(f"throw new {error}({message})")


# =============================================================================
# Prints
# =============================================================================

def _joined_with_spaces(args: List[str]) -> str:
    return ' + " " + '.join(args)


def emit_print(construct: Construct, ctx: RuleContext) -> Emission:
    args: List[str] = list(construct.get("args", []))
    language = ctx.target.language
    warnings = []
    if construct.get("dropped_keywords"):
        warnings.append("print keyword arguments have no equivalent and were dropped")

    if language == Language.PYTHON:
        text = f"print({', '.join(args)})"
    elif language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        text = f"console.log({', '.join(args)})"
    elif language == Language.JAVA:
        text = f"System.out.println({_joined_with_spaces(args)})"
    elif language == Language.CSHARP:
        text = f"Console.WriteLine({_joined_with_spaces(args)})"
    elif language == Language.GO:
        text = f"fmt.Println({', '.join(args)})"
    elif language == Language.CPP:
        parts = ["std::cout"]
        for index, arg in enumerate(args):
            parts.extend(['" "', arg] if index else [arg])
        text = " << ".join(parts + ["std::endl"])
    elif language == Language.RUST:
        if len(args) == 1 and args[0].startswith('"') and args[0].endswith('"'):
            text = f"println!({args[0]})"
        elif args:
            text = f"println!(\"{' '.join('{}' for _ in args)}\", {', '.join(args)})"
        else:
            text = "println!()"
    elif language == Language.PHP:
        text = f"echo {', '.join(args)}" if args else 'echo ""'
    else:
        text = f"puts {', '.join(args)}" if args else "puts"
    return Emission(text, tuple(warnings))


# =============================================================================
# Imports
# =============================================================================

_PATH_SEPARATORS: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: ".",
    Language.JAVASCRIPT: "/",
    Language.TYPESCRIPT: "/",
    Language.JAVA: ".",
    Language.CPP: "/",
    Language.CSHARP: ".",
    Language.GO: "/",
    Language.RUST: "::",
    Language.PHP: "\\",
    Language.RUBY: "/",
})


def _module_path(module: str, target: LanguageSpec) -> str:
    relative = module.startswith("./") or module.startswith("../")
    stem = re.sub(r"\.(?:php|rb|js|ts|h|hpp)$", "", module.strip())
    parts = [p for p in re.split(r"::|\\|/|\.", stem) if p]
    path = _PATH_SEPARATORS[target.language].join(parts)
    if relative and target.language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        path = "./" + path
    return path


_MODULE_IMPORT_TEMPLATES: Mapping[Language, str] = MappingProxyType({
    Language.JAVA: "import {path}.*;",
    Language.CPP: "#include <{path}>",
    Language.CSHARP: "using {path};",
    Language.GO: 'import "{path}"',
    Language.RUST: "use {path};",
    Language.PHP: "require_once '{path}';",
    Language.RUBY: "require '{path}'",
})


def emit_import_module(construct: Construct, ctx: RuleContext) -> Emission:
    module = construct.get("module")
    path = _module_path(module, ctx.target)
    alias = construct.get("alias")
    language = ctx.target.language
    if language == Language.PYTHON:
        default_alias = path.split(".")[-1]
        return Emission(f"import {path} as {alias}" if alias and alias != default_alias else f"import {path}")
    if language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        name = alias or re.split(r"[/.]", path)[-1]
        return Emission(f"import {name} from '{path}'")
    return Emission(_MODULE_IMPORT_TEMPLATES[language].format(path=path))


def emit_import_names(construct: Construct, ctx: RuleContext) -> Emission:
    module = construct.get("module")
    names: List[str] = list(construct.get("names", []))
    path = _module_path(module, ctx.target)
    language = ctx.target.language

    if language == Language.PYTHON:
        return Emission(f"from {path} import {', '.join(names)}")
    if language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        return Emission(f"import {{ {', '.join(names)} }} from '{path}'")
    if language == Language.RUST:
        return Emission(f"use {path}::{{{', '.join(names)}}};")
    if language == Language.PHP:
        return Emission(f"use {path}\\{{{', '.join(names)}}};")
    if language == Language.JAVA and len(names) == 1 and " " not in names[0]:
        return Emission(f"import {path}.{names[0]};")

    warning = f"{ctx.target.display_name} has no selective import, importing whole module"
    whole = emit_import_module(Construct(kind="import_module", values={"module": module}), ctx)
    return Emission(whole.text, (warning,))


def emit_prologue(construct: Construct, ctx: RuleContext) -> Emission:
    return Emission("")


# =============================================================================
# Variables
# =============================================================================

_DECLARATION_TEMPLATES: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "{name} = {value}",
    Language.JAVASCRIPT: "let {name} = {value}",
    Language.TYPESCRIPT: "let {name} = {value}",
    Language.JAVA: "Object {name} = {value}",
    Language.CPP: "auto {name} = {value}",
    Language.CSHARP: "var {name} = {value}",
    Language.GO: "{name} := {value}",
    Language.RUST: "let mut {name} = {value}",
    Language.PHP: "${name} = {value}",
    Language.RUBY: "{name} = {value}",
})

_HEADER_LINE = re.compile(
    r"^\s*(?:def|class|function|fn|func|if|elif|else|for|foreach|while|try|catch|except|finally"
    r"|switch|return|import|from|using|package|type|struct|public|private|protected)\b"
)


def emit_variable(construct: Construct, ctx: RuleContext) -> Emission:
    name = construct.get("name")
    value = construct.get("value")
    target = ctx.target
    if name in ctx.declared:
        text = f"{_var(name, target)} = {value}"
    else:
        ctx.declared.add(name)
        text = _DECLARATION_TEMPLATES[target.language].format(name=name, value=value)
    return Emission(_terminate(text, target))


def is_header_line(line: str) -> bool:
    """True for lines that open a definition or control block."""
    return bool(_HEADER_LINE.match(line))


# =============================================================================
# Emitter Table
# =============================================================================

_KIND_EMITTERS: Dict[str, Emitter] = {
    "function": emit_function,
    "class": emit_class,
    "if": emit_if,
    "else_if": emit_else_if,
    "else": emit_else,
    "block_end": emit_block_end,
    "pass": emit_pass,
    "for_range": emit_for_range,
    "for_each": emit_for_each,
    "for_counted": emit_for_counted,
    "while": emit_while,
    "try": emit_try,
    "catch": emit_catch,
    "finally": emit_finally,
    "raise": emit_raise,
    "print": emit_print,
    "import_module": emit_import_module,
    "import_names": emit_import_names,
    "prologue": emit_prologue,
    "variable": emit_variable,
}

# Constructs a target cannot express; the line passes through with this warning
NO_EQUIVALENT: Mapping[Tuple[str, Language], str] = MappingProxyType({
    ("for_counted", Language.PYTHON): "Python has no counted for loop; line left unchanged",
    ("for_counted", Language.RUBY): "Ruby has no counted for loop; line left unchanged",
    ("for_counted", Language.RUST): "Rust has no counted for loop; line left unchanged",
    ("try", Language.GO): "Go has no try/catch; line left unchanged",
    ("catch", Language.GO): "Go has no try/catch; line left unchanged",
    ("finally", Language.GO): "Go has no try/catch; line left unchanged",
    ("try", Language.RUST): "Rust has no try/catch; line left unchanged",
    ("catch", Language.RUST): "Rust has no try/catch; line left unchanged",
    ("finally", Language.RUST): "Rust has no try/catch; line left unchanged",
    ("finally", Language.CPP): "C++ has no finally block; line left unchanged",
})


def _build_emitters() -> Mapping[Tuple[str, Language], Emitter]:
    table: Dict[Tuple[str, Language], Emitter] = {}
    for kind, emitter in _KIND_EMITTERS.items():
        for language in Language:
            if (kind, language) not in NO_EQUIVALENT:
                table[(kind, language)] = emitter
    return MappingProxyType(table)


EMITTERS = _build_emitters()


def get_emitter(kind: str, target: Language) -> Optional[Emitter]:
    """Emitter for a construct kind in a target, or None when there is none."""
    return EMITTERS.get((kind, target))


def no_equivalent_warning(kind: str, target: LanguageSpec) -> str:
    return NO_EQUIVALENT.get(
        (kind, target.language),
        f"No {target.display_name} equivalent for {kind.replace('_', ' ')}; line left unchanged",
    )
