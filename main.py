"""
CLI entrypoint for the technical debt model importer.

This script performs the following steps:
- loads .env and the optional importer config (configs/importer.yaml)
- loads the rule catalog snapshot (YAML, CSV or Excel)
- reads and imports the model document
- logs a human-readable summary of the model and its validation messages
- optionally writes the validation report as JSON

Exit codes: 0 on success, 1 when the report holds errors, 2 when the
document cannot be read at all.
"""

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from application import import_debt_model_file, log_import_summary, serialize_report
from application.constants import EXIT_IMPORT_ERRORS, EXIT_MALFORMED_DOCUMENT, EXIT_OK, LOG_LEVELS
from domain.errors import MalformedDocumentError
from infrastructure.config import load_importer_config
from infrastructure.constants import IMPORTER_CONFIG_FILE, RULES_FILE
from infrastructure.io import ensure_exists
from infrastructure.observability import configure_logging, make_document_tag, set_log_context
from infrastructure.rules import load_rule_catalog

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Import a technical debt model document")
    p.add_argument(
        "document",
        type=str,
        help="Path to the model XML document",
    )
    p.add_argument(
        "--rules",
        type=str,
        default=None,
        help=f"Rule catalog file (default: rules_file from config, else {RULES_FILE})",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to importer.yaml (default: {IMPORTER_CONFIG_FILE} if it exists)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file (default: .env, skipped when missing)",
    )
    p.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write the validation report as JSON to this path",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=LOG_LEVELS,
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=LOG_LEVELS,
        help="File log level",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path: Path | None = Path(args.config) if args.config else None
    if config_path is None and IMPORTER_CONFIG_FILE.exists():
        config_path = IMPORTER_CONFIG_FILE
    cfg = load_importer_config(config_path)

    configure_logging(
        log_file=cfg.log_file,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    document_path = Path(args.document)
    ensure_exists(document_path, "model document")
    set_log_context(document_id=str(document_path))
    logger.info("Starting import: %s (doc=%s)", document_path, make_document_tag(str(document_path)))

    rules_path = Path(args.rules) if args.rules else (cfg.rules_file or RULES_FILE)
    catalog = load_rule_catalog(rules_path)

    try:
        model, report = import_debt_model_file(document_path, catalog, cfg)
    except MalformedDocumentError as err:
        logger.error("Cannot import %s: %s", document_path, err)
        return EXIT_MALFORMED_DOCUMENT

    report_path = Path(args.report) if args.report else None
    if report_path is not None:
        serialize_report(report, model, report_path)

    log_import_summary(model, report, report_path)

    return EXIT_IMPORT_ERRORS if report.has_errors() else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
