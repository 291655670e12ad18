"""
Exception hierarchy for model import.

Only MalformedDocumentError escapes an import. Every ImportIssue is raised
while building a single characteristic or requirement and is recorded in the
ValidationReport by the importer, which then moves on to the next element.
"""

from domain.report import Severity


class DebtModelError(Exception):
    """Base class for all debt model errors."""


class MalformedDocumentError(DebtModelError):
    """The input cannot be read as an element tree at all."""


class ImportIssue(DebtModelError):
    """Recoverable problem with one fragment of the document."""

    severity: Severity = Severity.ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnresolvedRuleWarning(ImportIssue):
    severity = Severity.WARNING

    def __init__(self, repository: str, key: str):
        self.repository = repository
        self.key = key
        super().__init__(f"Rule not found: [repository={repository}, key={key}]")


class DeprecatedFormatWarning(ImportIssue):
    severity = Severity.WARNING


class DuplicateKeyError(ImportIssue):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Cannot import characteristic '{key}' - Duplicate key")


class MissingFieldError(ImportIssue):
    def __init__(self, subject: str, field: str):
        self.subject = subject
        self.field = field
        super().__init__(f"Cannot import {subject} - Missing field {field}")


class InvalidFunctionError(ImportIssue):
    def __init__(self, function: str, rule: str | None = None):
        self.function = function
        self.rule = rule
        if rule is None:
            message = f"Function '{function}' is unknown"
        else:
            message = f"Function '{function}' is unknown on rule '{rule}'"
        super().__init__(message)

    def on_rule(self, rule: str) -> "InvalidFunctionError":
        """Return a copy of this error naming the rule it was found on."""
        return InvalidFunctionError(self.function, rule)


class InvalidNumericValueError(ImportIssue):
    def __init__(self, raw: str, field: str, expected: str = "a numeric value"):
        self.raw = raw
        self.field = field
        super().__init__(f"Cannot import value '{raw}' for field {field} - Expected {expected} instead")


class InvalidUnitError(InvalidNumericValueError):
    def __init__(self, raw: str, field: str, allowed: str):
        super().__init__(raw, field, expected=f"one of {allowed}")
