"""ARGB colour value object and its ``"a;r;g;b"`` text form."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """An ARGB colour; every channel is 0..255 and alpha defaults to opaque."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    alpha: int = Field(default=255, ge=0, le=255)
    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)

    @classmethod
    def from_argb(cls, alpha: int, red: int, green: int, blue: int) -> Color:
        return cls(alpha=alpha, red=red, green=green, blue=blue)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> Color:
        return cls(red=red, green=green, blue=blue)

    def serialize(self) -> str:
        return f"{self.alpha};{self.red};{self.green};{self.blue}"

    @classmethod
    def deserialize(cls, raw: str) -> Color:
        """
        Parse the ``"a;r;g;b"`` form.

        Raises:
            ValueError: If the text does not hold four integer channels in range
        """
        if not isinstance(raw, str):
            raise ValueError(f"Colour data must be a string, got {type(raw).__name__}")
        parts = raw.split(";")
        if len(parts) != 4:
            raise ValueError(f"Colour data must have four ';'-separated channels: {raw!r}")
        alpha, red, green, blue = (int(part.strip()) for part in parts)
        return cls.from_argb(alpha, red, green, blue)
