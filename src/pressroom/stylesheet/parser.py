"""Hand-written brace/quote-aware parser for theme stylesheets.

Syntax example:
    @import url(fonts.css);
    #wemd p { color: #333; margin: 0 0 16px; }
    @media (max-width: 600px) { #wemd h1 { font-size: 20px; } }

Not a full CSS grammar: the parser only needs rule and at-rule boundaries
so declarations can be rewritten and written back.
"""

from __future__ import annotations

from pressroom.model.css import AtRule, Declaration, Node, Rule, Stylesheet
from pressroom.scanning import find_matching_brace, split_declarations, strip_comments

__all__ = ["parse_stylesheet", "parse_declarations", "serialize_stylesheet"]


def parse_declarations(body: str) -> list[Declaration]:
    """Parse the body of a rule block into declarations, in source order."""
    return [Declaration.parse(chunk) for chunk in split_declarations(body)]


def _has_nested_block(body: str) -> bool:
    open_index = body.find("{")
    return open_index >= 0 and find_matching_brace(body, open_index) >= 0


def _parse_nodes(css: str) -> tuple[list[Node], str]:
    nodes: list[Node] = []
    i = 0
    length = len(css)
    while i < length:
        while i < length and css[i].isspace():
            i += 1
        if i >= length:
            break
        start = i

        if css[i] == "@":
            while i < length and css[i] not in "{;":
                i += 1
            prelude = css[start:i].strip()
            if i >= length or css[i] == ";":
                nodes.append(AtRule(prelude=prelude, standalone=True))
                i += 1
                continue
            end = find_matching_brace(css, i)
            if end < 0:
                return nodes, css[start:].strip()
            inner = css[i + 1 : end]
            if _has_nested_block(inner):
                # The outer block is balanced, so nothing can trail inside it.
                children, _ = _parse_nodes(inner)
                nodes.append(AtRule(prelude=prelude, children=children))
            else:
                nodes.append(AtRule(prelude=prelude, raw_body=inner.strip()))
            i = end + 1
            continue

        while i < length and css[i] != "{":
            i += 1
        selector = css[start:i].strip()
        if i >= length:
            # Bare declarations with no selector apply to everything.
            nodes.append(Rule(selector="*", declarations=parse_declarations(css[start:])))
            break
        end = find_matching_brace(css, i)
        if end < 0:
            return nodes, css[start:].strip()
        nodes.append(Rule(selector=selector, declarations=parse_declarations(css[i + 1 : end])))
        i = end + 1
    return nodes, ""


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse *source* into a Stylesheet of rules and at-rules.

    Comments are dropped.  Text after an unbalanced ``{`` is kept verbatim
    in :attr:`Stylesheet.trailing`.
    """
    nodes, trailing = _parse_nodes(strip_comments(source))
    return Stylesheet(nodes=nodes, trailing=trailing)


def _serialize_declarations(declarations: list[Declaration]) -> str:
    return ";".join(decl.serialize() for decl in declarations)


def _serialize_node(node: Node) -> str:
    if isinstance(node, Rule):
        return f"{node.selector}{{{_serialize_declarations(node.declarations)}}}"
    if node.standalone:
        return f"{node.prelude};"
    if node.children:
        return f"{node.prelude}{{{''.join(_serialize_node(child) for child in node.children)}}}"
    return f"{node.prelude}{{{node.raw_body}}}"


def serialize_stylesheet(stylesheet: Stylesheet) -> str:
    """Write a Stylesheet back out as compact CSS text."""
    return "".join(_serialize_node(node) for node in stylesheet.nodes) + stylesheet.trailing
