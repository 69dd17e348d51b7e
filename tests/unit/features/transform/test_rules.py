"""Tests for the rule table and token rewrites."""

import pytest

from codeshift_mcp.features.transform.recognizers import CATEGORIES
from codeshift_mcp.features.transform.rules import (
    RULES,
    RewriteRule,
    TokenRule,
    is_supported_pair,
    make_context,
    rewrite_endings,
    rewrite_identifiers,
    rewrite_literals,
    rewrite_operators,
    rules_for,
)
from codeshift_mcp.models.transformation import Language

# =============================================================================
# Rule Table Tests
# =============================================================================


class TestRuleTable:
    """Tests for rule lookup and pair support."""

    def test_rules_follow_category_order(self):
        """Test rules for a pair come back in category order."""
        categories = [rule.category for rule in rules_for(Language.PYTHON, Language.JAVASCRIPT)]
        assert categories == [c for c in CATEGORIES if c in categories]
        assert categories[-3:] == ["booleans", "operators", "endings"]

    def test_rule_kinds(self):
        """Test structural and token rules are distinct types."""
        assert isinstance(RULES[("functions", Language.PYTHON, Language.GO)], RewriteRule)
        assert isinstance(RULES[("endings", Language.PYTHON, Language.GO)], TokenRule)

    def test_no_rules_for_identity(self):
        """Test the table holds no same-language rules."""
        assert rules_for(Language.PYTHON, Language.PYTHON) == []

    def test_every_pair_supported(self):
        """Test every registered pair has structural rules."""
        for source in Language:
            for target in Language:
                assert is_supported_pair(source, target), (source, target)

    def test_unknown_language_unsupported(self):
        """Test a missing side is never supported."""
        assert not is_supported_pair(None, Language.PYTHON)
        assert not is_supported_pair(Language.PYTHON, None)

    def test_rule_leaves_unmatched_line(self, py_to_js):
        """Test a structural rule passes through lines it does not match."""
        rule = RULES[("functions", Language.PYTHON, Language.JAVASCRIPT)]
        outcome = rule.apply("x = 1", py_to_js)
        assert outcome.text == "x = 1"
        assert outcome.construct is None

    def test_rule_without_emitter_warns(self):
        """Test constructs the target cannot express pass through with a warning."""
        ctx = make_context(Language.PYTHON, Language.GO)
        rule = RULES[("exceptions", Language.PYTHON, Language.GO)]
        outcome = rule.apply("try:", ctx)
        assert outcome.text == "try:"
        assert outcome.warnings == ("Go has no try/catch; line left unchanged",)

    def test_variables_skip_headers(self, py_to_js):
        """Test header lines are not treated as assignments."""
        rule = RULES[("variables", Language.PYTHON, Language.JAVASCRIPT)]
        assert rule.apply("for x in y:", py_to_js).construct is None


# =============================================================================
# Token Rewrite Tests
# =============================================================================


class TestRewriteLiterals:
    """Tests for boolean and null literal rewriting."""

    def test_python_to_javascript(self, py_to_js):
        """Test literals are rewritten as whole tokens."""
        assert rewrite_literals("x = True if y is None else False", py_to_js) == "x = true if y is null else false"

    def test_strings_untouched(self, py_to_js):
        """Test literals inside strings are kept."""
        assert rewrite_literals('print("True")', py_to_js) == 'print("True")'

    def test_identifiers_containing_literals_untouched(self, py_to_js):
        """Test partial identifier matches are not rewritten."""
        assert rewrite_literals("NoneType = TrueValue", py_to_js) == "NoneType = TrueValue"

    def test_undefined_becomes_none(self, js_to_py):
        """Test JavaScript undefined maps to the null literal."""
        assert rewrite_literals("let x = undefined", js_to_py) == "let x = None"


class TestRewriteOperators:
    """Tests for logical and equality operator rewriting."""

    def test_words_to_symbols(self, py_to_js):
        """Test and/or/not become symbols."""
        assert rewrite_operators("a and not b or c", py_to_js) == "a && !b || c"

    def test_identity_comparison_becomes_strict(self, py_to_js):
        """Test is / is not become strict comparisons in JavaScript."""
        assert rewrite_operators("x is not None", py_to_js) == "x !== None"
        assert rewrite_operators("x is y", py_to_js) == "x === y"

    def test_identity_comparison_loose_in_java(self):
        """Test is becomes == for targets without strict equality."""
        ctx = make_context(Language.PYTHON, Language.JAVA)
        assert rewrite_operators("x is y", ctx) == "x == y"

    def test_not_in_kept(self, py_to_js):
        """Test membership tests are not negated."""
        assert rewrite_operators("x not in y", py_to_js) == "x not in y"

    def test_symbols_to_words(self, js_to_py):
        """Test &&/||/! become words and strict equality loosens."""
        assert rewrite_operators("a && !b", js_to_py) == "a and not b"
        assert rewrite_operators("a || b", js_to_py) == "a or b"
        assert rewrite_operators("x !== y", js_to_py) == "x != y"
        assert rewrite_operators("x === y", js_to_py) == "x == y"

    def test_not_equal_kept(self, js_to_py):
        """Test != is not mistaken for negation."""
        assert rewrite_operators("x != y", js_to_py) == "x != y"

    def test_strict_equality_loosened_for_java(self):
        """Test === becomes == for targets without strict equality."""
        ctx = make_context(Language.JAVASCRIPT, Language.JAVA)
        assert rewrite_operators("a === b", ctx) == "a == b"

    def test_strings_untouched(self, py_to_js):
        """Test operators inside strings are kept."""
        assert rewrite_operators('print("a and b")', py_to_js) == 'print("a and b")'


class TestRewriteEndingsAndIdentifiers:
    """Tests for terminators and receiver rewriting."""

    @pytest.mark.parametrize("line,expected", [
        ("x = 1", "x = 1;"),
        ("x = 1;", "x = 1;"),
        ("if (x) {", "if (x) {"),
        ("", ""),
    ])
    def test_endings(self, py_to_js, line, expected):
        """Test terminators are appended only where needed."""
        assert rewrite_endings(line, py_to_js) == expected

    def test_endings_for_unterminated_target(self, js_to_py):
        """Test targets without terminators get none."""
        assert rewrite_endings("x = 1", js_to_py) == "x = 1"

    def test_self_to_this(self, py_to_js):
        """Test python receivers become JavaScript receivers."""
        assert rewrite_identifiers("self.name = name", py_to_js) == "this.name = name"

    def test_php_receiver_and_sigils(self):
        """Test PHP receivers and sigils are rewritten for python."""
        ctx = make_context(Language.PHP, Language.PYTHON)
        assert rewrite_identifiers("$this->count = $n", ctx) == "self.count = n"

    def test_php_member_access_kept_for_cpp(self):
        """Test C++ keeps arrow member access."""
        ctx = make_context(Language.PHP, Language.CPP)
        assert rewrite_identifiers("$this->count = $n", ctx) == "this->count = n"
