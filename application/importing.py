"""Model import workflow."""

import logging
from pathlib import Path

from domain.characteristics import DebtModel
from domain.document import DocumentNode
from domain.importer import ModelImporter
from domain.report import ValidationReport
from domain.rules import RuleCatalog
from infrastructure.config import ImporterConfig
from infrastructure.document import parse_document, read_document
from infrastructure.observability import clear_document_context, clear_stage_context, set_log_context

logger = logging.getLogger(__name__)


def make_importer(cfg: ImporterConfig | None = None) -> ModelImporter:
    """Build a ModelImporter from configuration (defaults when cfg is None)."""
    cfg = cfg or ImporterConfig()
    return ModelImporter(hours_in_day=cfg.hours_in_day, duplicate_keys=cfg.duplicate_keys)


def import_debt_model(
    document: str | bytes,
    catalog: RuleCatalog,
    cfg: ImporterConfig | None = None,
    *,
    document_id: str | None = None,
) -> tuple[DebtModel, ValidationReport]:
    """
    Parse a model document and import it against a rule catalog.

    Args:
        document: XML text of the model document
        catalog: Rule catalog used to resolve requirement rules
        cfg: Importer configuration (defaults when None)
        document_id: Identifier used in logs and reports; none when omitted

    Returns:
        Tuple of (model, report)

    Raises:
        MalformedDocumentError: If the document cannot be read as an element tree
    """
    if document_id is None:
        clear_document_context()
    set_log_context(document_id=document_id, stage="parse")
    root = parse_document(document)
    return _import(root, catalog, cfg)


def import_debt_model_file(
    path: Path,
    catalog: RuleCatalog,
    cfg: ImporterConfig | None = None,
) -> tuple[DebtModel, ValidationReport]:
    """Same as import_debt_model, reading the document from `path`."""
    set_log_context(document_id=str(path), stage="parse")
    logger.info("Reading model document from %s...", path)
    root = read_document(path)
    return _import(root, catalog, cfg)


def _import(
    root: DocumentNode,
    catalog: RuleCatalog,
    cfg: ImporterConfig | None,
) -> tuple[DebtModel, ValidationReport]:
    set_log_context(stage="import")
    try:
        model, report = make_importer(cfg).import_document(root, catalog)
    finally:
        clear_stage_context()
    logger.info(
        "Model imported: %d characteristics, %d requirements (%d errors, %d warnings)",
        len(model.keys()),
        len(model.requirements()),
        len(report.errors),
        len(report.warnings),
    )
    return model, report
