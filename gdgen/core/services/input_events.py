"""
Input event describer — human-readable labels for action bindings.

Turns the raw ``events`` array of an ``[input]`` action into labels used
in generated doc comments:

    Object(InputEventKey,...,"keycode":32,...)            → "SPACE"
    Object(InputEventKey,...,"ctrl_pressed":true,...65)   → "ctrl+A"
    Object(InputEventMouseButton,...,"button_index":1,...) → "left_click"

Labels are informational only; an event that cannot be described is
skipped rather than failing the run.
"""

from __future__ import annotations

import logging

from gdgen.core.models.action import InputBinding

logger = logging.getLogger(__name__)

_OBJECT_PREFIX = "Object("

# Godot 4 special keys are offset by 1 << 22 (KEY_SPECIAL)
_SPECIAL = 1 << 22

_SPECIAL_KEYS: dict[int, str] = {
    1: "ESCAPE",
    2: "TAB",
    3: "BACKTAB",
    4: "BACKSPACE",
    5: "ENTER",
    6: "KP_ENTER",
    7: "INSERT",
    8: "DELETE",
    9: "PAUSE",
    10: "PRINT",
    11: "SYSREQ",
    12: "CLEAR",
    13: "HOME",
    14: "END",
    15: "LEFT",
    16: "UP",
    17: "RIGHT",
    18: "DOWN",
    19: "PAGEUP",
    20: "PAGEDOWN",
    21: "SHIFT",
    22: "CTRL",
    23: "META",
    24: "ALT",
    25: "CAPSLOCK",
    26: "NUMLOCK",
    27: "SCROLLLOCK",
    0x42: "MENU",
    0x81: "KP_MULTIPLY",
    0x82: "KP_DIVIDE",
    0x83: "KP_SUBTRACT",
    0x84: "KP_PERIOD",
    0x85: "KP_ADD",
}
# F1..F35
_SPECIAL_KEYS.update({28 + n: f"F{n + 1}" for n in range(35)})
# KP_0..KP_9
_SPECIAL_KEYS.update({0x86 + n: f"KP_{n}" for n in range(10)})

_ASCII_KEYS: dict[int, str] = {
    32: "SPACE",
    33: "EXCLAM",
    34: "QUOTEDBL",
    35: "NUMBERSIGN",
    36: "DOLLAR",
    37: "PERCENT",
    38: "AMPERSAND",
    39: "APOSTROPHE",
    40: "PARENLEFT",
    41: "PARENRIGHT",
    42: "ASTERISK",
    43: "PLUS",
    44: "COMMA",
    45: "MINUS",
    46: "PERIOD",
    47: "SLASH",
    58: "COLON",
    59: "SEMICOLON",
    60: "LESS",
    61: "EQUAL",
    62: "GREATER",
    63: "QUESTION",
    64: "AT",
    91: "BRACKETLEFT",
    92: "BACKSLASH",
    93: "BRACKETRIGHT",
    94: "ASCIICIRCUM",
    95: "UNDERSCORE",
    96: "QUOTELEFT",
    123: "BRACELEFT",
    124: "BAR",
    125: "BRACERIGHT",
    126: "ASCIITILDE",
}
_ASCII_KEYS.update({48 + n: f"NUM_{n}" for n in range(10)})
_ASCII_KEYS.update({code: chr(code) for code in range(65, 91)})

# Control characters Godot 3 stored in "unicode"
_UNICODE_NAMES: dict[int, str] = {
    8: "backspace",
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "delete",
}

_MOUSE_BUTTONS: dict[int, str] = {
    1: "left_click",
    2: "right_click",
    3: "middle_click",
    4: "wheel_up",
    5: "wheel_down",
    6: "wheel_left",
    7: "wheel_right",
    8: "xbutton1",
    9: "xbutton2",
}


# ── Parsing ─────────────────────────────────────────────────────


def parse_events(events: str) -> list[InputBinding]:
    """Parse a raw ``[Object(...), Object(...)]`` array into bindings."""
    bindings: list[InputBinding] = []
    for record in split_objects(events):
        binding = parse_object(record)
        if binding is not None:
            bindings.append(binding)
    return bindings


def split_objects(events: str) -> list[str]:
    """Extract every top-level ``Object(...)`` record from an array string."""
    records: list[str] = []
    start = events.find(_OBJECT_PREFIX)
    while start != -1:
        end = _match_paren(events, start + len(_OBJECT_PREFIX) - 1)
        if end == -1:
            logger.debug("Unterminated Object( in events: %s", events[start:start + 40])
            break
        records.append(events[start:end + 1])
        start = events.find(_OBJECT_PREFIX, end + 1)
    return records


def parse_object(record: str) -> InputBinding | None:
    """Parse ``Object(Type,"key":value,...)`` into an InputBinding."""
    if not record.startswith(_OBJECT_PREFIX) or not record.endswith(")"):
        return None
    body = record[len(_OBJECT_PREFIX):-1]
    event_type, sep, rest = body.partition(",")
    event_type = event_type.strip()
    if not event_type:
        return None

    properties: dict[str, str] = {}
    if sep:
        for part in split_top_level(rest, ","):
            key, colon, value = part.partition(":")
            if not colon:
                continue
            properties[key.strip().strip('"')] = value.strip()
    return InputBinding(event_type=event_type, properties=properties)


def split_top_level(text: str, delimiter: str) -> list[str]:
    """Split on *delimiter* outside strings and brackets."""
    parts: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    last = 0
    for pos, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth = max(depth - 1, 0)
        elif ch == delimiter and depth == 0:
            parts.append(text[last:pos])
            last = pos + 1
    tail = text[last:]
    if tail.strip():
        parts.append(tail)
    return parts


def _match_paren(text: str, open_pos: int) -> int:
    depth = 0
    in_string = False
    escaped = False
    for pos in range(open_pos, len(text)):
        ch = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return pos
    return -1


# ── Labels ──────────────────────────────────────────────────────


def describe(binding: InputBinding) -> str | None:
    """Label for one binding, or None if the event type is not supported."""
    if binding.event_type == "InputEventKey":
        base = key_label(
            binding.get_int("keycode"),
            binding.get_int("physical_keycode"),
            binding.get_int("unicode"),
        )
    elif binding.event_type == "InputEventMouseButton":
        base = mouse_label(
            binding.get_int("button_index") or 0,
            binding.get_bool("double_click"),
        )
    elif binding.event_type == "InputEventJoypadButton":
        index = binding.get_int("button_index")
        base = f"joypad_button_{index}" if index is not None else None
    elif binding.event_type == "InputEventJoypadMotion":
        axis = binding.get_int("axis")
        value = binding.properties.get("axis_value", "0").strip()
        sign = "-" if value.startswith("-") else "+"
        base = f"joypad_axis_{axis}{sign}" if axis is not None else None
    else:
        return None

    if not base:
        return None

    modifiers = "".join(
        f"{name}+"
        for name in ("ctrl", "shift", "alt")
        if binding.get_bool(f"{name}_pressed")
    )
    return modifiers + base


def describe_events(events: str) -> list[str]:
    """Labels for every describable binding in a raw events array."""
    labels: list[str] = []
    for binding in parse_events(events):
        label = describe(binding)
        if label is None:
            logger.debug("No label for %s event", binding.event_type)
            continue
        labels.append(label)
    return labels


def key_label(
    keycode: int | None,
    physical_keycode: int | None,
    unicode: int | None,
) -> str | None:
    """Key name from the first non-zero of keycode, physical_keycode, unicode."""
    for code in (keycode, physical_keycode):
        if code:
            return _key_name(code)
    if unicode:
        if unicode in _UNICODE_NAMES:
            return _UNICODE_NAMES[unicode]
        if 32 <= unicode <= 126:
            return chr(unicode)
        return ""
    return None


def mouse_label(button_index: int, double_click: bool = False) -> str | None:
    label = _MOUSE_BUTTONS.get(button_index)
    if label is None:
        return None
    return f"double_{label}" if double_click else label


def _key_name(code: int) -> str:
    if code & _SPECIAL:
        name = _SPECIAL_KEYS.get(code & ~_SPECIAL)
    else:
        name = _ASCII_KEYS.get(code)
    return name or f"KEY_{code}"
