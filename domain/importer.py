"""
Build a DebtModel from a parsed model document.

The importer walks the document top-down, builds one Characteristic per
characteristic element and one Requirement per requirement element, and
collects every recoverable problem in a ValidationReport instead of raising.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from domain.characteristics.model import Characteristic, DebtModel
from domain.document import DocumentNode
from domain.errors import (
    DeprecatedFormatWarning,
    DuplicateKeyError,
    ImportIssue,
    InvalidFunctionError,
    MalformedDocumentError,
    MissingFieldError,
    UnresolvedRuleWarning,
)
from domain.remediation.functions import SourceFunction, normalize
from domain.remediation.requirement import Requirement
from domain.report import ValidationReport
from domain.rules.catalog import RuleCatalog
from domain.rules.reference import RuleReference
from domain.work_unit import HOURS_IN_DAY, WorkUnit

logger = logging.getLogger(__name__)

ROOT_TAG = "characteristics"
CHARACTERISTIC_TAG = "characteristic"
REQUIREMENT_TAG = "requirement"


class DuplicateKeyPolicy(str, Enum):
    """What to do when a characteristic key appears more than once."""

    LAST_WINS = "last_wins"  # keep both nodes, later one wins lookups
    WARN = "warn"  # LAST_WINS plus a warning
    REJECT = "reject"  # drop the later occurrence with an error


@dataclass
class _ImportSession:
    """State owned by a single import call."""

    catalog: RuleCatalog
    report: ValidationReport = field(default_factory=ValidationReport)
    seen_keys: set[str] = field(default_factory=set)


class ModelImporter:
    """
    Turns a DocumentNode tree into a (DebtModel, ValidationReport) pair.

    The importer keeps no state between calls; each call gets its own report.
    """

    def __init__(
        self,
        *,
        hours_in_day: int = HOURS_IN_DAY,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.WARN,
    ) -> None:
        if hours_in_day <= 0:
            raise ValueError(f"hours_in_day must be positive, got {hours_in_day}")
        self.hours_in_day = hours_in_day
        self.duplicate_keys = duplicate_keys

    def import_document(self, root: DocumentNode, catalog: RuleCatalog) -> tuple[DebtModel, ValidationReport]:
        """
        Import a parsed document against a rule catalog.

        Args:
            root: Root element; must be a "characteristics" element
            catalog: Rule catalog used to resolve requirement rules

        Returns:
            Tuple of (model, report). The model may be empty; callers must
            inspect the report even when the call succeeds.

        Raises:
            MalformedDocumentError: If the root is not a characteristics element
        """
        if root.tag != ROOT_TAG:
            raise MalformedDocumentError(f"Expected a <{ROOT_TAG}> root element, got <{root.tag}>")

        session = _ImportSession(catalog=catalog)
        roots: list[Characteristic] = []
        for element in root.children_named(CHARACTERISTIC_TAG):
            characteristic = self._build_characteristic(
                element,
                session,
                parent_key=None,
                order=len(roots) + 1,
            )
            if characteristic is not None:
                roots.append(characteristic)

        model = DebtModel(roots=tuple(roots))
        logger.debug(
            "Imported %d root characteristics (%d total), %d requirements, %d errors, %d warnings",
            len(model.roots),
            len(model.keys()),
            len(model.requirements()),
            len(session.report.errors),
            len(session.report.warnings),
        )
        return model, session.report

    def _build_characteristic(
        self,
        element: DocumentNode,
        session: _ImportSession,
        *,
        parent_key: str | None,
        order: int | None,
    ) -> Characteristic | None:
        try:
            key = self._read_key(element, session)
        except ImportIssue as issue:
            session.report.record(issue)
            return None

        children: list[Characteristic] = []
        requirements: list[Requirement] = []
        for child in element.children:
            if child.tag == CHARACTERISTIC_TAG:
                built = self._build_characteristic(child, session, parent_key=key, order=None)
                if built is not None:
                    children.append(built)
            elif child.tag == REQUIREMENT_TAG:
                requirement = self._import_requirement(child, key, session)
                if requirement is not None:
                    requirements.append(requirement)
            elif child.tag not in ("key", "name"):
                logger.debug("Ignoring <%s> element in characteristic '%s'", child.tag, key)

        return Characteristic(
            key=key,
            name=element.field("name") or "",
            order=order,
            parent_key=parent_key,
            children=tuple(children),
            requirements=tuple(requirements),
        )

    def _read_key(self, element: DocumentNode, session: _ImportSession) -> str:
        """Read and register a characteristic key, applying the duplicate key policy."""
        key = element.field("key")
        if key is None:
            raise MissingFieldError("characteristic", "key")
        if element.field("name") is None:
            raise MissingFieldError(f"characteristic '{key}'", "name")

        if key in session.seen_keys:
            if self.duplicate_keys is DuplicateKeyPolicy.REJECT:
                raise DuplicateKeyError(key)
            if self.duplicate_keys is DuplicateKeyPolicy.WARN:
                session.report.add_warning(
                    f"Duplicate characteristic key '{key}' - the last occurrence is used for lookups"
                )
        session.seen_keys.add(key)
        return key

    def _import_requirement(
        self,
        element: DocumentNode,
        characteristic_key: str,
        session: _ImportSession,
    ) -> Requirement | None:
        try:
            return self._build_requirement(element, characteristic_key, session)
        except ImportIssue as issue:
            logger.debug("Dropping requirement in '%s': %s", characteristic_key, issue.message)
            session.report.record(issue)
            return None

    def _build_requirement(
        self,
        element: DocumentNode,
        characteristic_key: str,
        session: _ImportSession,
    ) -> Requirement:
        subject = f"requirement in characteristic '{characteristic_key}'"
        repository = element.field("rule-repository")
        if repository is None:
            raise MissingFieldError(subject, "rule-repository")
        rule_key = element.field("rule-key")
        if rule_key is None:
            raise MissingFieldError(subject, "rule-key")

        if session.catalog.find(repository, rule_key) is None:
            raise UnresolvedRuleWarning(repository, rule_key)
        rule = RuleReference(repository=repository, key=rule_key)

        function_name = element.field("function")
        if function_name is None:
            raise MissingFieldError(f"requirement on rule '{rule}'", "function")
        try:
            source = SourceFunction.parse(function_name)
        except InvalidFunctionError as err:
            raise err.on_rule(str(rule)) from err

        normalization = normalize(source)
        warning = normalization.warning(str(rule))
        if normalization.dropped:
            raise DeprecatedFormatWarning(warning or f"Remediation of rule '{rule}' is ignored")

        factor_value = element.field("factor-value")
        if factor_value is None:
            raise MissingFieldError(f"requirement on rule '{rule}'", "factor-value")
        factor = WorkUnit.parse(
            factor_value,
            element.field("factor-unit"),
            field="factor",
            hours_in_day=self.hours_in_day,
        )

        offset = WorkUnit.zero(hours_in_day=self.hours_in_day)
        offset_value = element.field("offset-value")
        if normalization.keeps_offset and offset_value is not None:
            offset = WorkUnit.parse(
                offset_value,
                element.field("offset-unit"),
                field="offset",
                hours_in_day=self.hours_in_day,
            )

        requirement = Requirement(
            rule=rule,
            function=normalization.function,
            factor=factor,
            offset=offset,
        )
        if warning is not None:
            session.report.add_warning(warning)
        return requirement
