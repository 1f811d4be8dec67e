"""Result types carrying partially-successful codec output plus diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from itemmeta.exceptions import HandlerError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HandlerDiagnostic:
    """One variant handler failure recorded during a codec call."""

    variant: str
    operation: str
    error: HandlerError

    @property
    def cause(self) -> str:
        return str(self.error.cause) if self.error.cause is not None else self.error.message


@dataclass(slots=True)
class CodecResult(Generic[T]):
    """
    The value a codec call produced and the handler failures it survived.

    ``value`` is always populated with whatever was accumulated; callers that
    cannot accept partial data check ``ok``.
    """

    value: T
    diagnostics: list[HandlerDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics
