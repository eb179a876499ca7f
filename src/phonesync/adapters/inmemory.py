"""In-memory patient record store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from phonesync.domain.model import NATIONAL_ID_SYSTEM
from phonesync.domain.versioning import MetadataStamper

if TYPE_CHECKING:
    from collections.abc import Iterable

    from phonesync.domain.model import PatientRecord

log = getLogger(__name__)


class InMemoryPatientRepository:
    """Indexes records by national identifier for the duration of one run.

    Records are held by reference, so mutations made through ``apply_phone``
    are visible in ``list_all`` and to whoever loaded them.
    """

    def __init__(
        self,
        records: Iterable[PatientRecord],
        *,
        national_id_system: str = NATIONAL_ID_SYSTEM,
        stamper: MetadataStamper | None = None,
    ) -> None:
        self._records: list[PatientRecord] = list(records)
        self._stamper = stamper or MetadataStamper()
        self._by_key: dict[str, PatientRecord] = {}
        for record in self._records:
            key = record.identifier_value(national_id_system)
            if key is None:
                continue
            previous = self._by_key.get(key)
            if previous is not None and previous is not record:
                log.warning(
                    "Identifier %s is shared by patients %s and %s; using %s",
                    key,
                    previous.id,
                    record.id,
                    record.id,
                )
            self._by_key[key] = record

    def find_by_key(self, identifier: str) -> PatientRecord | None:
        return self._by_key.get(identifier)

    def list_all(self) -> list[PatientRecord]:
        return list(self._records)

    def apply_phone(self, record: PatientRecord, canonical_value: str) -> bool:
        return record.apply_mobile_phone(canonical_value, stamper=self._stamper)

    def __len__(self) -> int:
        return len(self._records)


if TYPE_CHECKING:
    from phonesync.domain.ports.persistence import PatientRepository

    _repository_check: PatientRepository = InMemoryPatientRepository(())
