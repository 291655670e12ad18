"""
Remediation functions and requirements.

All backward compatibility for remediation functions lives in
domain.remediation.functions: deprecated encodings are normalized once,
before a Requirement is built.
"""

from domain.remediation.functions import Normalization, RemediationFunction, SourceFunction, normalize
from domain.remediation.requirement import Requirement

__all__ = [
    "RemediationFunction",
    "SourceFunction",
    "Normalization",
    "normalize",
    "Requirement",
]
