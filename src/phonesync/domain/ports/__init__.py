"""Domain port definitions for adapters."""

from __future__ import annotations

from .normalizing import PhoneNormalizerPort
from .persistence import OutputWriter, PatientRepository, PatientSource
from .reporting import UpdateReporterPort
from .sources import ChangeRowSource

__all__ = [
    "ChangeRowSource",
    "OutputWriter",
    "PatientRepository",
    "PatientSource",
    "PhoneNormalizerPort",
    "UpdateReporterPort",
]
