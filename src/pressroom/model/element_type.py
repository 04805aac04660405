"""Semantic element types used to pick a dark-mode colour remap."""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """What a colour paints, as far as the dark-mode remap cares."""

    HEADING = "heading"
    BODY = "body"
    BACKGROUND = "background"
    TABLE = "table"
    TABLE_TEXT = "table-text"
    BLOCKQUOTE = "blockquote"
    BLOCKQUOTE_TEXT = "blockquote-text"
    CODE = "code"
    CODE_TEXT = "code-text"
    DECORATIVE_DARK = "decorative-dark"
    VIBRANT_PROTECTED = "vibrant-protected"
    SELECTION = "selection"
    SELECTION_TEXT = "selection-text"
    OTHER = "other"

    @property
    def is_text(self) -> bool:
        """True for foreground types remapped by luminance band."""
        return self in TEXT_TYPES


TEXT_TYPES = frozenset({
    ElementType.HEADING,
    ElementType.BODY,
    ElementType.OTHER,
    ElementType.TABLE_TEXT,
    ElementType.BLOCKQUOTE_TEXT,
    ElementType.CODE_TEXT,
    ElementType.SELECTION_TEXT,
})
