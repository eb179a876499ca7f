# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from phonesync.adapters.bundle import RunReport
from phonesync.app import (
    build_patient_io,
    build_row_source,
    import_patient_bundle,
    sync_whatsapp_numbers,
)
from phonesync.config import (
    ConfigurationError,
    StorageConfig,
    configure_logging,
    get_storage_config,
    get_sync_config,
)
from phonesync.domain.model import PhoneFormat

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_PHONE_FORMAT_CHOICES = ("international", "national", "e164", "local0")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="phonesync",
        description="Apply WhatsApp number updates to patient records",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Reconcile a change-log against patient records")
    sync.add_argument("--patients", type=Path, help="Patient bundle JSON (defaults to config)")
    sync.add_argument("--sheet", type=Path, help="Change-log CSV export (defaults to config)")
    sync.add_argument(
        "--sheet-url",
        type=str,
        help="Fetch the change-log CSV from this URL instead of a local file",
    )
    sync.add_argument(
        "--database-uri",
        type=str,
        help="Read and write patients in this database instead of the JSON bundle",
    )
    sync.add_argument("--outdir", type=Path, help="Directory for output artifacts")
    sync.add_argument(
        "--phone-format",
        choices=_PHONE_FORMAT_CHOICES,
        help="Canonical phone format (default: international, +62...)",
    )

    importer = subparsers.add_parser(
        "import-patients",
        help="Load a patient bundle JSON into the database store",
    )
    importer.add_argument("--patients", type=Path, help="Patient bundle JSON (defaults to config)")
    importer.add_argument(
        "--database-uri",
        type=str,
        help="Target database (defaults to DATABASE_URI)",
    )

    return parser.parse_args(list(argv))


def _storage_from_args(args: argparse.Namespace, base: StorageConfig) -> StorageConfig:
    return replace(
        base,
        patients_path=getattr(args, "patients", None) or base.patients_path,
        sheet_path=getattr(args, "sheet", None) or base.sheet_path,
        sheet_url=getattr(args, "sheet_url", None) or base.sheet_url,
        database_uri=getattr(args, "database_uri", None) or base.database_uri,
        output_dir=getattr(args, "outdir", None) or base.output_dir,
    )


def _run_sync(args: argparse.Namespace, storage: StorageConfig) -> None:
    sync_config = get_sync_config()
    phone_format = (
        PhoneFormat.parse(args.phone_format) if args.phone_format else sync_config.phone_format
    )
    patient_source, writer = build_patient_io(
        storage, national_id_system=sync_config.national_id_system
    )
    stats = sync_whatsapp_numbers(
        row_source=build_row_source(storage),
        patient_source=patient_source,
        writer=writer,
        phone_format=phone_format,
        national_id_system=sync_config.national_id_system,
    )
    print(
        f"Update complete. Rows processed: {stats.total_rows}, updated: {stats.updated}, "
        f"unchanged: {stats.unchanged}, invalid format: {stats.invalid_format}, "
        f"missing patient: {stats.missing_patient}"
    )
    print(f"Outputs written to: {storage.output_dir}")
    summary = {
        "summary": RunReport.from_statistics(stats).as_payload(),
        "output_dir": str(storage.output_dir),
    }
    print(json.dumps(summary, indent=2))


def _run_import(storage: StorageConfig) -> None:
    if storage.database_uri is None:
        raise ConfigurationError("Missing --database-uri (or DATABASE_URI)")
    count = import_patient_bundle(
        storage.patients_path,
        storage.database_uri,
        national_id_system=get_sync_config().national_id_system,
    )
    print(f"Imported {count} patients")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        storage = _storage_from_args(parsed_args, get_storage_config())
        if parsed_args.command == "import-patients" and storage.database_uri is None:
            raise ConfigurationError("Missing --database-uri (or DATABASE_URI)")  # noqa: TRY301
        get_sync_config()
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            _run_sync(parsed_args, storage)
        elif parsed_args.command == "import-patients":
            _run_import(storage)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
