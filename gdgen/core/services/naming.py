"""
Identifier naming — turn project names into Rust identifiers.

All functions here are total and deterministic: every input string maps
to exactly one valid identifier, so generated code never depends on
ad-hoc string surgery at the call site.

Letters and digits from any script are kept (Rust accepts non-ASCII
identifiers); everything else separates words.

    group_type_name("2d_physics")   → "Physics2d"
    snake_case("MoveLeft")          → "move_left"
    constant_name("non colliding")  → "NON_COLLIDING"
    constant_name("свет")           → "СВЕТ"
"""

from __future__ import annotations

import re

# Letter/digit runs in any script; underscores and punctuation separate
_TOKEN = re.compile(r"[^\W_]+")

# Prefix for type names that would otherwise be empty or start with a digit
_TYPE_PREFIX = "Group"

# Constant name for an empty project name
_UNNAMED = "UNNAMED"


def _identifier_char(ch: str) -> bool:
    # Drops alphanumerics Rust rejects in identifiers, such as "²"
    return ("_" + ch).isidentifier()


def tokens(name: str) -> list[str]:
    """Runs of identifier letters and digits, in order."""
    result = []
    for run in _TOKEN.findall(name):
        kept = "".join(ch for ch in run if _identifier_char(ch))
        if kept:
            result.append(kept)
    return result


def _split_token(token: str) -> list[str]:
    """Camel-case and letter/digit boundaries inside one token.

    ``HTTPRequest`` → HTTP, Request; ``layer2D`` → layer, 2, D;
    ``MoveLeft`` → Move, Left. Uncased scripts stay in one word.
    """
    parts: list[str] = []
    start = 0
    for i in range(1, len(token)):
        prev, ch = token[i - 1], token[i]
        nxt = token[i + 1] if i + 1 < len(token) else ""
        if prev.isdigit() != ch.isdigit():
            boundary = True
        elif ch.isupper() and not prev.isupper():
            boundary = True
        else:
            # last capital of an acronym starts the next word
            boundary = prev.isupper() and ch.isupper() and nxt.islower()
        if boundary:
            parts.append(token[start:i])
            start = i
    parts.append(token[start:])
    return parts


def words(name: str) -> list[str]:
    """Split into words on separators and camel-case boundaries."""
    result: list[str] = []
    for token in tokens(name):
        result.extend(_split_token(token))
    return result


def group_type_name(group: str) -> str:
    """Type name for a layer group.

    Tokens that start with a digit (``2d``, ``3d``) move to the end so the
    name does not start with a digit; every token then gets an upper-case
    first letter, with the rest of the token left as written.

    Examples:
        ``2d_physics``    → ``Physics2d``
        ``3d_navigation`` → ``Navigation3d``
        ``avoidance``     → ``Avoidance``
        ``myGroup``       → ``MyGroup``
        ``2d``            → ``Group2d``
    """
    parts = tokens(group)
    leading = [p for p in parts if not p[0].isdigit()]
    trailing = [p for p in parts if p[0].isdigit()]

    name = "".join(p[0].upper() + p[1:] for p in leading + trailing)
    if not name or name[0].isdigit():
        name = _TYPE_PREFIX + name
    return name


def snake_case(name: str) -> str:
    """Lower snake_case for method and module names.

    ``MoveLeft`` → ``move_left``, ``ui_accept`` → ``ui_accept``,
    ``HTTPRequest`` → ``http_request``, ``Jump 2`` → ``jump_2``.
    Returns an empty string when *name* has no letters or digits.
    """
    return "_".join(w.lower() for w in words(name))


def codepoint_name(name: str) -> str:
    """``U`` plus the hex code points of *name*: ``!?`` → ``U0021_003F``."""
    if not name:
        return _UNNAMED
    return "U" + "_".join(f"{ord(ch):04X}" for ch in name)


def constant_name(name: str, fallback: str | None = None) -> str:
    """UPPER_SNAKE name for constants and enum variants.

    A name without letters or digits becomes *fallback*, or its code
    points when no fallback is given. A leading digit gets a ``_``
    prefix.
    """
    result = snake_case(name).upper() or fallback or codepoint_name(name)
    if result[0].isdigit():
        result = "_" + result
    return result
