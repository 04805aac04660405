"""Pressroom model layer -- public type re-exports."""

from pressroom.model.css import AtRule, Declaration, Node, Rule, Stylesheet
from pressroom.model.diagnostic import Diagnostic, Severity
from pressroom.model.element_type import TEXT_TYPES, ElementType

__all__ = [
    # css
    "Declaration",
    "Rule",
    "AtRule",
    "Node",
    "Stylesheet",
    # element types
    "ElementType",
    "TEXT_TYPES",
    # diagnostic
    "Severity",
    "Diagnostic",
]
