"""
Rich text components and their JSON / legacy-code text forms.

Display names, lore lines and book pages are stored in the IR as JSON text
component strings. Hand-written configuration often uses the older
``&``-code form instead ("&aGreen &lbold"), which is parsed into components
on the way in.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

LEGACY_COLOR_NAMES: dict[str, str] = {
    "0": "black",
    "1": "dark_blue",
    "2": "dark_green",
    "3": "dark_aqua",
    "4": "dark_red",
    "5": "dark_purple",
    "6": "gold",
    "7": "gray",
    "8": "dark_gray",
    "9": "blue",
    "a": "green",
    "b": "aqua",
    "c": "red",
    "d": "light_purple",
    "e": "yellow",
    "f": "white",
}

LEGACY_DECORATIONS: dict[str, str] = {
    "k": "obfuscated",
    "l": "bold",
    "m": "strikethrough",
    "n": "underlined",
    "o": "italic",
}

_LEGACY_MARKERS = ("&", "§")
_HEX_DIGITS = set("0123456789abcdefABCDEF")


class TextComponent(BaseModel):
    """A styled run of text with optional child components."""

    model_config = ConfigDict(extra="ignore")

    text: str = ""
    color: str | None = None
    bold: bool | None = None
    italic: bool | None = None
    underlined: bool | None = None
    strikethrough: bool | None = None
    obfuscated: bool | None = None
    extra: list[TextComponent] = Field(default_factory=list)

    @classmethod
    def of(cls, text: str, **style: Any) -> TextComponent:
        return cls(text=text, **style)


class TextComponentSerializer:
    """Converts TextComponent objects to and from their JSON string form."""

    def serialize(self, component: TextComponent) -> str:
        payload = component.model_dump(exclude_none=True, exclude_defaults=True)
        if "text" not in payload:
            payload = {"text": "", **payload}
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)

    def deserialize(self, raw: str) -> TextComponent:
        """
        Parse a JSON text component.

        Accepts an object, a bare JSON string, or an array (the first element
        is the parent of the rest).

        Raises:
            ValueError: If the text is not a valid component
        """
        try:
            payload = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid text component JSON: {exc}") from exc
        return self._from_payload(payload)

    def _from_payload(self, payload: Any) -> TextComponent:
        if isinstance(payload, str):
            return TextComponent(text=payload)
        if isinstance(payload, list):
            if not payload:
                return TextComponent()
            head = self._from_payload(payload[0])
            tail = [self._from_payload(item) for item in payload[1:]]
            return head.model_copy(update={"extra": [*head.extra, *tail]})
        if isinstance(payload, dict):
            try:
                return TextComponent.model_validate(payload)
            except ValidationError as exc:
                raise ValueError(f"Invalid text component: {exc}") from exc
        raise ValueError(f"Unsupported text component payload: {type(payload).__name__}")

    @staticmethod
    def looks_like_json(raw: str) -> bool:
        return "{" in raw and "}" in raw

    def deserialize_lenient(self, raw: str) -> TextComponent:
        """JSON components pass through; anything else is read as legacy ``&``-coded text."""
        if self.looks_like_json(raw):
            return self.deserialize(raw)
        return translate_legacy_colors(raw)


def translate_legacy_colors(message: str) -> TextComponent:
    """
    Parse ``&``/``§`` formatting codes into a component tree.

    Colour codes reset decorations, ``&r`` resets everything and ``&#rrggbb``
    selects a hex colour. The result is explicitly non-italic, which is how
    item display text is rendered.
    """
    segments: list[TextComponent] = []
    buffer: list[str] = []
    style: dict[str, Any] = {}

    def flush() -> None:
        if buffer:
            segments.append(TextComponent(text="".join(buffer), **style))
            buffer.clear()

    index = 0
    length = len(message)
    while index < length:
        char = message[index]
        if char in _LEGACY_MARKERS and index + 1 < length:
            code = message[index + 1].lower()
            hex_code = message[index + 2 : index + 8]
            if code == "#" and len(hex_code) == 6 and set(hex_code) <= _HEX_DIGITS:
                flush()
                style = {"color": f"#{hex_code.lower()}"}
                index += 8
                continue
            if code in LEGACY_COLOR_NAMES:
                flush()
                style = {"color": LEGACY_COLOR_NAMES[code]}
                index += 2
                continue
            if code in LEGACY_DECORATIONS:
                flush()
                style = {**style, LEGACY_DECORATIONS[code]: True}
                index += 2
                continue
            if code == "r":
                flush()
                style = {}
                index += 2
                continue
        buffer.append(char)
        index += 1
    flush()

    if len(segments) == 1 and not segments[0].extra:
        only = segments[0]
        return only.model_copy(update={"italic": bool(only.italic)})
    return TextComponent(text="", italic=False, extra=segments)
