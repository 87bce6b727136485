import re
from typing import Tuple
from ..schemas import Styling

KNOWN_KEYS = ("bg", "color")

_BLOCK_PROPS = re.compile(r"^\[\[(.*?)]]\n?")


def parse_props(prop_line: str) -> Styling:
    """
    Read whitespace-separated `key=value` tokens.
    Unknown keys and tokens without a value are skipped, never fatal.
    """
    found = {}
    for token in prop_line.strip().split():
        parts = token.split("=")
        if len(parts) < 2:
            continue
        key, value = parts[0], parts[1]
        if key in KNOWN_KEYS and value:
            found[key] = value
    return Styling(**found)


def take_block_props(source: str) -> Tuple[Styling, str]:
    """Strip a leading `[[...]]` line; returns (props, remaining text)."""
    m = _BLOCK_PROPS.match(source)
    if not m:
        return Styling(), source
    return parse_props(m.group(1)), source[m.end():]


def is_card_props_line(line: str) -> bool:
    s = line.strip()
    return len(s) >= 2 and s.startswith("[") and s.endswith("]")


def take_card_props(lines: list[str]) -> Tuple[Styling, list[str]]:
    """Strip a leading `[...]` line from a block's non-blank lines."""
    if lines and is_card_props_line(lines[0]):
        return parse_props(lines[0].strip()[1:-1]), lines[1:]
    return Styling(), lines
