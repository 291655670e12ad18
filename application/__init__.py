"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure:
reading a model document, importing it against a rule catalog,
and reporting the outcome.
"""

from application.importing import import_debt_model, import_debt_model_file, make_importer
from application.serialize import report_payload, serialize_report
from application.summary import log_import_summary

__all__ = [
    # Main workflows
    "import_debt_model",
    "import_debt_model_file",
    "make_importer",
    # Reporting
    "log_import_summary",
    "report_payload",
    "serialize_report",
]
