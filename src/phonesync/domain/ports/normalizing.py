"""Port for phone normalization strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from phonesync.domain.model import CanonicalPhone


@runtime_checkable
class PhoneNormalizerPort(Protocol):
    def normalize(self, raw_input: str | None) -> CanonicalPhone: ...


__all__ = ["PhoneNormalizerPort"]
