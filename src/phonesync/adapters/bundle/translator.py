"""Translate between bundle payloads and domain patient records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phonesync.domain.model import ContactPoint, Identifier, PatientRecord, RecordMetadata

if TYPE_CHECKING:
    from .schema import MetaPayload, PatientResourcePayload, TelecomPayload


def _to_metadata(meta: MetaPayload) -> RecordMetadata:
    return RecordMetadata(
        version_tag=meta.version_id,
        last_modified=meta.last_updated,
        extensions=meta.extensions,
    )


def _to_contact_point(telecom: TelecomPayload) -> ContactPoint:
    return ContactPoint(
        system=telecom.system,
        value=telecom.value,
        use=telecom.use,
        rank=telecom.rank,
        extensions=telecom.extensions,
    )


def parse_patient(resource: PatientResourcePayload) -> PatientRecord:
    return PatientRecord(
        id=resource.id,
        resource_type=resource.resource_type,
        identifiers=[
            Identifier(system=item.system, value=item.value, extensions=item.extensions)
            for item in resource.identifier or ()
        ],
        contact_channels=(
            [_to_contact_point(item) for item in resource.telecom]
            if resource.telecom is not None
            else None
        ),
        metadata=_to_metadata(resource.meta) if resource.meta is not None else None,
        extensions=resource.extensions,
    )


def _optional(pairs: list[tuple[str, object]]) -> dict[str, object]:
    return {key: value for key, value in pairs if value is not None}


def _metadata_dict(metadata: RecordMetadata) -> dict[str, object]:
    data = _optional(
        [("versionId", metadata.version_tag), ("lastUpdated", metadata.last_modified)]
    )
    data.update(metadata.extensions)
    return data


def _identifier_dict(identifier: Identifier) -> dict[str, object]:
    data = _optional([("system", identifier.system), ("value", identifier.value)])
    data.update(identifier.extensions)
    return data


def _contact_point_dict(channel: ContactPoint) -> dict[str, object]:
    data = _optional(
        [
            ("system", channel.system),
            ("use", channel.use),
            ("value", channel.value),
            ("rank", channel.rank),
        ]
    )
    data.update(channel.extensions)
    return data


def dump_patient(record: PatientRecord) -> dict[str, object]:
    """Render ``record`` as a JSON-ready resource mapping."""

    data: dict[str, object] = {"resourceType": record.resource_type, "id": record.id}
    if record.metadata is not None:
        data["meta"] = _metadata_dict(record.metadata)
    if record.identifiers:
        data["identifier"] = [_identifier_dict(item) for item in record.identifiers]
    data.update(record.extensions)
    if record.contact_channels is not None:
        data["telecom"] = [_contact_point_dict(item) for item in record.contact_channels]
    return data
