"""Human-readable import summary."""

import logging
from pathlib import Path

from domain.characteristics import Characteristic, DebtModel
from domain.report import ValidationReport

logger = logging.getLogger(__name__)


def _log_tree(characteristic: Characteristic, depth: int) -> None:
    indent = "  " * depth
    prefix = f"{characteristic.order}. " if characteristic.order is not None else ""
    logger.debug(
        "%s%s%s (%s) - %d requirements",
        indent,
        prefix,
        characteristic.key,
        characteristic.name,
        len(characteristic.requirements),
    )
    for child in characteristic.children:
        _log_tree(child, depth + 1)


def log_import_summary(
    model: DebtModel,
    report: ValidationReport,
    report_path: Path | None = None,
) -> None:
    """
    Log a concise, human-readable import summary.

    Args:
        model: Imported model
        report: Validation report of the import
        report_path: Path to the report JSON file (optional)
    """
    logger.info("=== Import Summary ===")
    logger.info(
        "Root characteristics: %s",
        ", ".join(root.key for root in model.roots) if not model.is_empty() else "none",
    )
    logger.info("Characteristics: %d", len(model.keys()))
    logger.info("Requirements: %d", len(model.requirements()))
    for root in model.roots:
        _log_tree(root, 0)

    logger.info("--- Messages ---")
    if report.has_messages():
        logger.info("Errors: %d, warnings: %d", len(report.errors), len(report.warnings))
        report.log(logger)
    else:
        logger.info("No errors or warnings.")

    if report_path is not None:
        logger.info("--- Artifacts ---")
        logger.info("Report JSON: %s", report_path)
