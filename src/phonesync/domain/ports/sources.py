"""Ports for reading the change-log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from phonesync.domain.model import ChangeRow


@runtime_checkable
class ChangeRowSource(Protocol):
    """Produces the finite, unordered change-log for one run."""

    def load_rows(self) -> list[ChangeRow]: ...


__all__ = ["ChangeRowSource"]
