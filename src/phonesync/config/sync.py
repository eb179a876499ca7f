"""Reconciliation defaults: canonical phone format and lookup identifier system."""

from __future__ import annotations

from dataclasses import dataclass

from phonesync.domain.model import NATIONAL_ID_SYSTEM, PhoneFormat

from .env import optional_env_var
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SyncConfig:
    phone_format: PhoneFormat = PhoneFormat.INTERNATIONAL
    national_id_system: str = NATIONAL_ID_SYSTEM


def get_sync_config() -> SyncConfig:
    raw_format = optional_env_var("PHONESYNC_PHONE_FORMAT", PhoneFormat.INTERNATIONAL.value)
    try:
        phone_format = PhoneFormat.parse(raw_format)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    return SyncConfig(
        phone_format=phone_format,
        national_id_system=optional_env_var("PHONESYNC_NATIONAL_ID_SYSTEM", NATIONAL_ID_SYSTEM),
    )
