"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- work_unit: remediation cost values and unit conversion
- rules: rule references and the rule catalog port
- remediation: remediation functions (incl. deprecated encodings) and requirements
- characteristics: the characteristic tree and the DebtModel aggregate
- importer: builds a DebtModel from a parsed document
- report: validation messages collected during import
"""

from domain.characteristics import Characteristic, DebtModel
from domain.importer import DuplicateKeyPolicy, ModelImporter
from domain.remediation import RemediationFunction, Requirement
from domain.report import ValidationReport
from domain.rules import Rule, RuleCatalog, RuleReference
from domain.work_unit import TimeUnit, WorkUnit

__all__ = [
    "Characteristic",
    "DebtModel",
    "ModelImporter",
    "DuplicateKeyPolicy",
    "RemediationFunction",
    "Requirement",
    "ValidationReport",
    "Rule",
    "RuleCatalog",
    "RuleReference",
    "TimeUnit",
    "WorkUnit",
]
