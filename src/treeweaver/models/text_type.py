"""Document classes and their node kinds."""

from __future__ import annotations

from enum import Enum


class TextType(str, Enum):
    """Classification of the analysed text; selects the node kind vocabulary."""

    LEGAL = "LEGAL"
    POETRY = "POETRY"
    PHILOSOPHY = "PHILOSOPHY"
    SNS = "SNS"
    GENERAL = "GENERAL"


ROOT_KIND = "ROOT"

# First entry is the default kind for manually added nodes.
NODE_KINDS_BY_TEXT_TYPE: dict[TextType, tuple[str, ...]] = {
    TextType.LEGAL: ("RULE", "CONDITION", "EFFECT", "EXCEPTION", "DEFINITION", "OTHER"),
    TextType.POETRY: ("VERSE", "KIGO", "SCENE", "EMOTION", "TECHNIQUE", "OTHER"),
    TextType.PHILOSOPHY: ("AXIOM", "DEFINITION", "PROPOSITION", "PROOF", "COROLLARY", "OTHER"),
    TextType.SNS: ("CLAIM", "EVIDENCE", "INTENT", "RHETORIC", "EMOTION", "OTHER"),
    TextType.GENERAL: ("CLAIM", "EVIDENCE", "CONTEXT", "SECTION", "SUMMARY", "OTHER"),
}


def allowed_kinds(text_type: TextType | str) -> tuple[str, ...]:
    """Return node kinds for a text type, falling back to GENERAL for unknown names."""

    try:
        return NODE_KINDS_BY_TEXT_TYPE[TextType(text_type)]
    except ValueError:
        return NODE_KINDS_BY_TEXT_TYPE[TextType.GENERAL]


def default_kind(text_type: TextType | str) -> str:
    return allowed_kinds(text_type)[0]
