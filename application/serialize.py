"""Report serialization."""

import json
import logging
from pathlib import Path

from domain.characteristics import DebtModel
from domain.report import ValidationReport
from infrastructure.observability import get_log_context

logger = logging.getLogger(__name__)


def report_payload(report: ValidationReport, model: DebtModel) -> dict[str, object]:
    """Report messages plus model counts; the model itself is not serialized."""
    context = get_log_context()
    return {
        "document_id": context["document_id"],
        "roots": [root.key for root in model.roots],
        "characteristics": len(model.keys()),
        "requirements": len(model.requirements()),
        **report.as_dict(),
    }


def serialize_report(report: ValidationReport, model: DebtModel, report_path: Path) -> Path:
    """Write the report payload to `report_path` as JSON."""
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with report_path.open("w", encoding="utf-8") as f:
        json.dump(report_payload(report, model), f, ensure_ascii=False, indent=2)

    logger.info("Saved report JSON: %s", report_path)
    return report_path
