"""Patient record aggregate.

Only the national identifier, the mobile contact channel and the version
metadata are interpreted. Every other attribute rides along in an
``extensions`` mapping and is written back untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import ContactSystem, ContactUse

if TYPE_CHECKING:
    from phonesync.domain.versioning import MetadataStamper

MOBILE_RANK = 1
NATIONAL_ID_SYSTEM = "https://fhir.kemkes.go.id/id/nik"


@dataclass(slots=True)
class Identifier:
    system: str | None = None
    value: str | None = None
    extensions: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class ContactPoint:
    system: str | None = None
    value: str | int | None = None
    use: str | None = None
    rank: int | None = None
    extensions: dict[str, object] = field(default_factory=dict)

    @property
    def is_mobile_phone(self) -> bool:
        return self.system == ContactSystem.PHONE and self.use == ContactUse.MOBILE


@dataclass(slots=True)
class RecordMetadata:
    version_tag: str | None = None
    last_modified: str | None = None
    extensions: dict[str, object] = field(default_factory=dict)


@dataclass(eq=False, slots=True)
class PatientRecord:
    """Mutable patient aggregate keyed by ``id``.

    ``contact_channels`` and ``metadata`` are ``None`` when the source record
    carried none; they are created on the first effective phone change.
    """

    id: str
    identifiers: list[Identifier] = field(default_factory=list)
    contact_channels: list[ContactPoint] | None = None
    metadata: RecordMetadata | None = None
    resource_type: str = "Patient"
    extensions: dict[str, object] = field(default_factory=dict)

    def identifier_value(self, system: str) -> str | None:
        for identifier in self.identifiers:
            if identifier.system == system:
                return identifier.value
        return None

    def mobile_channel(self) -> ContactPoint | None:
        for channel in self.contact_channels or ():
            if channel.is_mobile_phone:
                return channel
        return None

    def apply_mobile_phone(self, value: str, *, stamper: MetadataStamper) -> bool:
        """Point the mobile channel at ``value``; return whether anything changed.

        Re-applying the current value is a no-op: neither the channel nor the
        metadata is touched.
        """

        existing = self.mobile_channel()
        if existing is not None and existing.value == value:
            return False

        metadata = self.metadata or RecordMetadata()
        stamp = stamper.next_stamp(metadata.version_tag)

        if existing is not None:
            existing.value = value
            existing.rank = MOBILE_RANK
        else:
            if self.contact_channels is None:
                self.contact_channels = []
            self.contact_channels.append(
                ContactPoint(
                    system=ContactSystem.PHONE,
                    use=ContactUse.MOBILE,
                    value=value,
                    rank=MOBILE_RANK,
                )
            )

        metadata.last_modified = stamp.last_modified
        metadata.version_tag = stamp.version_tag
        self.metadata = metadata
        return True
