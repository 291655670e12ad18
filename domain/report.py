"""Validation messages collected while importing a model."""

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from domain.errors import ImportIssue


class Severity(str, Enum):
    """Severity of a validation message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationReport(BaseModel):
    """
    Ordered, append-only collection of import messages.

    Messages are never deduplicated: two requirements failing the same way
    produce two messages, each naming its own rule.
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    infos: list[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_info(self, message: str) -> None:
        self.infos.append(message)

    def record(self, issue: "ImportIssue") -> None:
        """Append an import issue to the list matching its severity."""
        if issue.severity is Severity.ERROR:
            self.add_error(issue.message)
        elif issue.severity is Severity.WARNING:
            self.add_warning(issue.message)
        else:
            self.add_info(issue.message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_messages(self) -> bool:
        return bool(self.errors or self.warnings or self.infos)

    def log(self, logger: logging.Logger) -> None:
        """Emit every message on `logger` at the matching level."""
        for message in self.errors:
            logger.error(message)
        for message in self.warnings:
            logger.warning(message)
        for message in self.infos:
            logger.info(message)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "infos": list(self.infos),
        }
