"""Tests for the theme stylesheet parser and serializer."""

from pressroom.model.css import AtRule, Declaration, Rule, Stylesheet
from pressroom.stylesheet import parse_declarations, parse_stylesheet, serialize_stylesheet


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestDeclarations:
    def test_parse_basic(self):
        assert parse_declarations(" color: #333; margin: 0 0 16px ") == [
            Declaration("color", "#333"),
            Declaration("margin", "0 0 16px"),
        ]

    def test_important_flag(self):
        decl = Declaration.parse("color: red ! IMPORTANT")
        assert decl == Declaration("color", "red", important=True)
        assert decl.serialize() == "color: red !important"

    def test_value_with_colon(self):
        decl = Declaration.parse("background: url(https://x.test/a.png)")
        assert decl.property == "background"
        assert decl.value == "url(https://x.test/a.png)"

    def test_malformed_kept_verbatim(self):
        decl = Declaration.parse("oops")
        assert decl.is_malformed
        assert decl.serialize() == "oops"

    def test_custom_property(self):
        assert Declaration.parse("--wemd-gap: 4px").is_custom
        assert not Declaration.parse("gap: 4px").is_custom


# ---------------------------------------------------------------------------
# Rules and at-rules
# ---------------------------------------------------------------------------


class TestParseStylesheet:
    def test_rules(self):
        sheet = parse_stylesheet("#wemd p { color: #333; } #wemd h1{font-size:20px}")
        assert sheet.nodes == [
            Rule("#wemd p", [Declaration("color", "#333")]),
            Rule("#wemd h1", [Declaration("font-size", "20px")]),
        ]
        assert sheet.trailing == ""

    def test_comments_dropped(self):
        sheet = parse_stylesheet("/* header */ p { /* inline */ color: red; }")
        assert sheet.nodes == [Rule("p", [Declaration("color", "red")])]

    def test_media_children(self):
        sheet = parse_stylesheet("@media (max-width: 600px) { h1 { color: red; } p { color: blue; } }")
        (node,) = sheet.nodes
        assert isinstance(node, AtRule)
        assert node.prelude == "@media (max-width: 600px)"
        assert [child.selector for child in node.children] == ["h1", "p"]

    def test_font_face_raw_body(self):
        sheet = parse_stylesheet('@font-face { font-family: "X"; src: url(x.woff2); }')
        (node,) = sheet.nodes
        assert node.children == []
        assert node.raw_body == 'font-family: "X"; src: url(x.woff2);'

    def test_standalone_at_rules(self):
        sheet = parse_stylesheet('@charset "utf-8"; @import url(a.css); p { color: red; }')
        assert sheet.nodes[0] == AtRule('@charset "utf-8"', standalone=True)
        assert sheet.nodes[1] == AtRule("@import url(a.css)", standalone=True)
        assert isinstance(sheet.nodes[2], Rule)

    def test_standalone_at_end_of_input(self):
        sheet = parse_stylesheet("@import url(a.css)")
        assert sheet.nodes == [AtRule("@import url(a.css)", standalone=True)]

    def test_bare_declarations_become_universal_rule(self):
        sheet = parse_stylesheet("color: red; background: white")
        assert sheet.nodes == [
            Rule("*", [Declaration("color", "red"), Declaration("background", "white")])
        ]

    def test_brace_inside_string(self):
        sheet = parse_stylesheet('p::before { content: "}"; color: red; }')
        (rule,) = sheet.nodes
        assert rule.declarations == [Declaration("content", '"}"'), Declaration("color", "red")]

    def test_unbalanced_block_kept_as_trailing(self):
        sheet = parse_stylesheet("p { color: red; } h1 { color: blue;")
        assert sheet.nodes == [Rule("p", [Declaration("color", "red")])]
        assert sheet.trailing == "h1 { color: blue;"

    def test_empty(self):
        assert parse_stylesheet("") == Stylesheet(nodes=[])


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerializeStylesheet:
    def test_compact_output(self):
        sheet = parse_stylesheet("p { color: red; margin: 0 !important; }")
        assert serialize_stylesheet(sheet) == "p{color: red;margin: 0 !important}"

    def test_at_rules(self):
        css = '@import url(a.css); @media print { p { color: red; } } @font-face { font-family: "X"; }'
        assert serialize_stylesheet(parse_stylesheet(css)) == (
            '@import url(a.css);@media print{p{color: red}}@font-face{font-family: "X";}'
        )

    def test_trailing_text_appended(self):
        sheet = parse_stylesheet("p { color: red; } h1 {")
        assert serialize_stylesheet(sheet) == "p{color: red}h1 {"

    def test_reparse_is_stable(self):
        css = "@media screen { #wemd h2 { color: #222; } } #wemd p { line-height: 1.75; }"
        once = serialize_stylesheet(parse_stylesheet(css))
        assert serialize_stylesheet(parse_stylesheet(once)) == once
