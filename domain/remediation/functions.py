"""Remediation function kinds and normalization of deprecated encodings."""

from dataclasses import dataclass
from enum import Enum

from domain.errors import InvalidFunctionError


class RemediationFunction(str, Enum):
    """Function kinds a built Requirement can carry."""

    LINEAR = "linear"
    LINEAR_WITH_OFFSET = "linear_with_offset"


class SourceFunction(str, Enum):
    """Every function encoding the importer understands, deprecated ones included."""

    LINEAR = "linear"
    LINEAR_WITH_OFFSET = "linear_with_offset"
    LINEAR_WITH_THRESHOLD = "linear_with_threshold"
    CONSTANT_PER_FILE = "constant_per_file"

    @classmethod
    def parse(cls, name: str) -> "SourceFunction":
        """
        Parse a function name, accepting the legacy sqale spellings.

        Raises:
            InvalidFunctionError: If the name is unknown
        """
        key = str(name).strip().lower()
        if key in _LEGACY_NAMES:
            return _LEGACY_NAMES[key]
        try:
            return cls(key)
        except ValueError as err:
            raise InvalidFunctionError(str(name).strip()) from err

    @property
    def deprecated(self) -> bool:
        return self in (SourceFunction.LINEAR_WITH_THRESHOLD, SourceFunction.CONSTANT_PER_FILE)


_LEGACY_NAMES: dict[str, SourceFunction] = {
    "linear_offset": SourceFunction.LINEAR_WITH_OFFSET,
    "linear_threshold": SourceFunction.LINEAR_WITH_THRESHOLD,
    "constant_resource": SourceFunction.CONSTANT_PER_FILE,
}


@dataclass(frozen=True)
class Normalization:
    """Outcome of normalizing a source function.

    function is None when the requirement must be dropped.
    """

    source: SourceFunction
    function: RemediationFunction | None
    keeps_offset: bool

    @property
    def dropped(self) -> bool:
        return self.function is None

    def warning(self, rule: str) -> str | None:
        """Warning to report for `rule`, or None when the source is current."""
        if self.source is SourceFunction.LINEAR_WITH_THRESHOLD:
            return (
                "Linear with threshold function is no longer used, "
                f"remediation function of rule '{rule}' is replaced by linear"
            )
        if self.source is SourceFunction.CONSTANT_PER_FILE:
            return f"Constant per file function is no longer used, remediation of rule '{rule}' is ignored"
        return None


_NORMALIZATIONS: dict[SourceFunction, Normalization] = {
    SourceFunction.LINEAR: Normalization(SourceFunction.LINEAR, RemediationFunction.LINEAR, keeps_offset=True),
    SourceFunction.LINEAR_WITH_OFFSET: Normalization(
        SourceFunction.LINEAR_WITH_OFFSET, RemediationFunction.LINEAR_WITH_OFFSET, keeps_offset=True
    ),
    # threshold has no offset semantics: dropped, offset forced to zero
    SourceFunction.LINEAR_WITH_THRESHOLD: Normalization(
        SourceFunction.LINEAR_WITH_THRESHOLD, RemediationFunction.LINEAR, keeps_offset=False
    ),
    SourceFunction.CONSTANT_PER_FILE: Normalization(SourceFunction.CONSTANT_PER_FILE, None, keeps_offset=False),
}


def normalize(source: SourceFunction) -> Normalization:
    """Map a source function onto a current function kind (or a drop)."""
    return _NORMALIZATIONS[source]
