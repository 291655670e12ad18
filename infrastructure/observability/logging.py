"""
Logging setup for the importer.

Every record carries `doc` (short tag of the document being imported) and
`stage` (parse or import), read from contextvars so concurrent imports in
different contexts do not mix up their tags.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

cv_document_tag = contextvars.ContextVar("document_tag", default="-")
cv_stage = contextvars.ContextVar("stage", default="-")

# full id goes into JSON reports; log lines only show the tag
cv_document_id = contextvars.ContextVar("document_id", default="-")


def make_document_tag(document_id: str, length: int = 8) -> str:
    """Short BLAKE2s tag of a document id; the same path always gives the same tag."""
    return hashlib.blake2s(document_id.encode("utf-8"), digest_size=8).hexdigest()[:length]


class ContextInjectFilter(logging.Filter):
    """Copy the document tag and stage onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.doc = cv_document_tag.get()
        record.stage = cv_stage.get()
        return True


def set_log_context(
    *,
    document_id: str | None = None,
    stage: str | None = None,
) -> None:
    """Set the document and/or stage reported by subsequent log records."""
    if document_id is not None:
        cv_document_id.set(str(document_id))
        cv_document_tag.set(make_document_tag(str(document_id)))

    if stage is not None:
        cv_stage.set(str(stage))


def get_log_context() -> dict[str, str]:
    """Current context, e.g. for the JSON report."""
    return {
        "document_tag": cv_document_tag.get(),
        "document_id": cv_document_id.get(),
        "stage": cv_stage.get(),
    }


def clear_stage_context() -> None:
    """Reset the stage; the document stays set."""
    cv_stage.set("-")


def clear_document_context() -> None:
    """Forget the current document (e.g. before importing in-memory text)."""
    cv_document_id.set("-")
    cv_document_tag.set("-")


CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] doc=%(doc)s stage=%(stage)s | %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | doc=%(doc)s stage=%(stage)s | %(message)s"
LOG_FILE_MAX_BYTES = 5_000_000
LOG_FILE_BACKUPS = 3


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ContextInjectFilter())
    root.addHandler(handler)


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route all loggers to the console and, when `log_file` is set, to a rotating file.

    Calling it again replaces the previously installed handlers.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(min(console_level, file_level) if log_file is not None else console_level)

    _attach(root, logging.StreamHandler(), console_level, logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        _attach(root, handler, file_level, logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    # pandas pulls in openpyxl for Excel rule catalogs
    logging.getLogger("openpyxl").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured (console=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file or "-",
    )
