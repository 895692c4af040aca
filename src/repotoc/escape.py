"""Markdown escaping for extracted descriptions."""

import re

BACKSLASH_ESCAPE = re.compile(r"\\(\S)")
HEADING = re.compile(r"^(#{1,6} )", re.MULTILINE)
HORIZONTAL_RULE = re.compile(r"^([-*_] *){3,}$", re.MULTILINE)
ORDERED_LIST = re.compile(r"^(\W* {0,3})(\d+)\. ", re.MULTILINE)
UNORDERED_LIST = re.compile(r"^([^\\\w]*)[*+-] ", re.MULTILINE)
BLOCKQUOTE = re.compile(r"^(\W* {0,3})> ", re.MULTILINE)
INLINE = re.compile(r"([*_`|])")


def _escape_horizontal_rule(match: re.Match) -> str:
    # "*" and "_" rules are left to the INLINE pass
    rule = match.group(0)
    if "-" in rule:
        return rule.replace("-", "\\-", 3)
    return rule


def _escape_bullet(match: re.Match) -> str:
    # "*" bullets are left to the INLINE pass
    return re.sub(r"([+-])", r"\\\1", match.group(0))


def escape_markdown(text: str) -> str:
    """Neutralize markdown syntax in ``text`` so it can be embedded in a list item.

    Escapes, in order: existing backslash escapes, ATX headings, horizontal
    rules, ordered and unordered list markers, blockquotes, and finally every
    ``*``, ``_``, backtick and ``|``. Each pass only adds backslashes the later
    passes do not touch, so no character is escaped twice. Not idempotent.

    Args:
        text: Description text, usually a single line

    Returns:
        The escaped text

    Examples:
        >>> escape_markdown("# Heading")
        '\\\\# Heading'
        >>> escape_markdown("50% off!")
        '50% off!'
    """
    text = BACKSLASH_ESCAPE.sub(r"\\\\\1", text)
    text = HEADING.sub(r"\\\1", text)
    text = HORIZONTAL_RULE.sub(_escape_horizontal_rule, text)
    text = ORDERED_LIST.sub(r"\1\2\\. ", text)
    text = UNORDERED_LIST.sub(_escape_bullet, text)
    text = BLOCKQUOTE.sub(r"\1\\> ", text)
    return INLINE.sub(r"\\\1", text)
