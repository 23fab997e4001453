"""Keyboard contract: which keypad button each key presses."""

KEY_BUTTONS: dict[str, str] = {
    **{str(digit): f"number-{digit}" for digit in range(10)},
    ".": "point",
    "Escape": "clear",
    "Enter": "equals",
    "=": "equals",
    "+": "plus",
    "-": "minus",
    "*": "multiply",
    "x": "multiply",
    "/": "divide",
    "%": "percent",
}

# Textual reports non-printable keys by lower-case name
KEY_ALIASES: dict[str, str] = {
    "escape": "Escape",
    "enter": "Enter",
}


def button_for_key(key: str) -> str | None:
    """Return the keypad button id for ``key``, or None if it is not bound."""
    return KEY_BUTTONS.get(KEY_ALIASES.get(key, key))


def split_keys(text: str) -> list[str]:
    """Split a typed key sequence into keys.

    Whitespace separates tokens. A token naming a key (``Escape``, ``Enter``)
    is one key; any other token is a run of single-character keys, so
    ``"12+3 Enter"`` is ``1, 2, +, 3, Enter``.
    """
    keys: list[str] = []
    for token in text.split():
        if KEY_ALIASES.get(token, token) in ("Escape", "Enter"):
            keys.append(token)
        else:
            keys.extend(token)
    return keys
