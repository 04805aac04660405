"""Tests for static (whole-document) CSS variable expansion."""

import re

import pytest

from pressroom.transforms.variable_expansion import (
    VariableExpansionTransform,
    expand_css_variables,
    extract_custom_properties,
    strip_custom_property_declarations,
)

_CUSTOM_DECL_RE = re.compile(r"--[\w-]+\s*:")


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


class TestExtractCustomProperties:
    def test_collects_across_rules(self):
        css = "#wemd { --a: 1px; } #wemd p { --b: red; color: blue; }"
        assert extract_custom_properties(css) == {"--a": "1px", "--b": "red"}

    def test_last_declaration_wins_globally(self):
        css = "#wemd { --c: #111; } #wemd blockquote { --c: #222; }"
        assert extract_custom_properties(css) == {"--c": "#222"}

    def test_value_with_semicolon_in_url(self):
        css = "#wemd { --bg: url(data:image/png;base64,AA); }"
        assert extract_custom_properties(css) == {"--bg": "url(data:image/png;base64,AA)"}

    def test_last_declaration_without_semicolon(self):
        assert extract_custom_properties("#wemd{--a:2px}") == {"--a": "2px"}


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------


class TestExpandCssVariables:
    def test_simple_references(self):
        css = """
          #wemd { --wemd-font-size: 14px; --wemd-text-color: #333; }
          #wemd p { font-size: var(--wemd-font-size); color: var(--wemd-text-color); }
        """
        result = expand_css_variables(css)
        assert "font-size: 14px" in result
        assert "color: #333" in result
        assert "var(" not in result

    def test_chained_references(self):
        css = "#wemd{--a:16px;--b:var(--a);} #wemd p{font-size:var(--b);}"
        result = expand_css_variables(css)
        assert "font-size: 16px;" in result
        assert "--a" not in result
        assert "--b" not in result

    def test_fallback_for_undefined(self):
        result = expand_css_variables("#wemd p { color: var(--undefined-var, #999); }")
        assert "color: #999" in result
        assert "var(" not in result

    def test_nested_var_in_fallback(self):
        css = """
          #wemd { --wemd-primary: blue; }
          #wemd a { color: var(--missing, var(--wemd-primary)); }
        """
        result = expand_css_variables(css)
        assert "color: blue" in result
        assert "var(" not in result

    def test_cycle_uses_fallback(self):
        css = "#wemd { --a: var(--b); --b: var(--a); } #wemd p { color: var(--a, #334455); }"
        result = expand_css_variables(css)
        assert "color: #334455" in result
        assert "var(--a" not in result
        assert "var(--b" not in result

    def test_self_reference_without_fallback_left_literal(self):
        css = "#wemd { --a: var(--a); } #wemd p { color: var(--a); }"
        result = expand_css_variables(css)
        assert "color: var(--a)" in result

    def test_undefined_without_fallback_left_literal(self):
        result = expand_css_variables("p { color: var(--nope); }")
        assert "var(--nope)" in result

    def test_complex_values(self):
        css = """
          #wemd { --wemd-primary: #1677ff; --wemd-primary-20: rgba(22, 119, 255, 0.12); }
          #wemd strong { background: var(--wemd-primary-20); color: var(--wemd-primary); }
        """
        result = expand_css_variables(css)
        assert "background: rgba(22, 119, 255, 0.12)" in result
        assert "color: #1677ff" in result

    def test_quoted_var_left_alone(self):
        css = '#wemd p { font-family: "var(--fake-family)"; color: var(--x, #222); }'
        result = expand_css_variables(css)
        assert '"var(--fake-family)"' in result
        assert "color: #222" in result

    def test_apostrophe_in_comment(self):
        css = "/* Jess's theme */ #wemd { --a: #123456; } #wemd p { color: var(--a); }"
        result = expand_css_variables(css)
        assert "color: #123456" in result
        assert "var(" not in result
        assert "Jess" not in result

    def test_var_only_inside_comment(self):
        result = expand_css_variables("/* uses var(--a) */ #wemd { --a: 1px; } p { top: 0; }")
        assert result.strip() == "p { top: 0; }"

    def test_inside_media_query(self):
        css = "#wemd { --gap: 8px; } @media (max-width: 600px) { #wemd p { margin: var(--gap); } }"
        result = expand_css_variables(css)
        assert "margin: 8px" in result
        assert "@media (max-width: 600px)" in result

    def test_important_kept(self):
        result = expand_css_variables("#wemd { --c: red; } p { color: var(--c) !important; }")
        assert "color: red !important;" in result


# ---------------------------------------------------------------------------
# Declaration stripping
# ---------------------------------------------------------------------------


class TestStripping:
    def test_no_custom_declarations_remain(self):
        css = """
          #wemd { --wemd-font-size: 14px; font-family: serif; }
          #wemd p { font-size: var(--wemd-font-size); --local: 1; }
        """
        result = expand_css_variables(css)
        assert not _CUSTOM_DECL_RE.search(result)
        assert "font-family: serif" in result

    def test_rule_with_only_custom_properties_removed(self):
        css = "#wemd { --wemd-font-size: 14px; }\n#wemd p { font-size: var(--wemd-font-size); }"
        result = expand_css_variables(css)
        assert not re.search(r"#wemd\s*\{", result)
        assert "{}" not in result.replace(" ", "")
        assert "#wemd p { font-size: 14px; }" in result

    def test_emptied_at_rule_removed(self):
        css = "@media print { #wemd { --a: 1px; } } p { width: var(--a); }"
        result = expand_css_variables(css)
        assert "@media" not in result
        assert "width: 1px" in result

    def test_mixed_block_keeps_regular_properties(self):
        css = "#wemd { --wemd-font-size: 14px; padding: 0 8px; color: #333; overflow-wrap: break-word; }"
        result = strip_custom_property_declarations(css)
        assert result == "#wemd { padding: 0 8px; color: #333; overflow-wrap: break-word; }"

    def test_statement_before_rule_survives(self):
        css = "@import url(a.css);\n#wemd { --a: 1px; }\np { top: var(--a); }"
        result = expand_css_variables(css)
        assert result.startswith("@import url(a.css);")

    def test_empty_custom_property_stripped(self):
        result = expand_css_variables("#wemd p { --a: ; color: var(--b, red); }")
        assert result == "#wemd p { color: red; }"

    def test_empty_custom_property_not_a_definition(self):
        assert extract_custom_properties("#wemd { --a: ; --b: 1px; }") == {"--b": "1px"}


# ---------------------------------------------------------------------------
# Short circuit and idempotence
# ---------------------------------------------------------------------------


class TestNoOpAndIdempotence:
    def test_empty_string(self):
        assert expand_css_variables("") == ""

    @pytest.mark.parametrize(
        "css",
        [
            "#wemd p { font-size: 14px; color: #333; }",
            "#wemd { --unused: 1px; } p{color:red}",
            "p {\n  margin: 0\n}\n",
        ],
    )
    def test_no_var_returns_identical(self, css):
        assert expand_css_variables(css) is css

    @pytest.mark.parametrize(
        "css",
        [
            "#wemd{--a:16px;--b:var(--a);} #wemd p{font-size:var(--b);}",
            "#wemd { --a: var(--b); --b: var(--a); } #wemd p { color: var(--a, #334455); }",
            "p { color: var(--nope); } #x { --y: 1px; }",
        ],
    )
    def test_idempotent(self, css):
        once = expand_css_variables(css)
        assert expand_css_variables(once) == once

    def test_transform_protocol(self):
        css = "#wemd { --a: 2px; } p { top: var(--a); }"
        assert VariableExpansionTransform().apply(css) == expand_css_variables(css)
