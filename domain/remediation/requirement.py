"""Remediation requirement bound to a catalog rule."""

from pydantic import BaseModel, ConfigDict, Field

from domain.remediation.functions import RemediationFunction
from domain.rules.reference import RuleReference
from domain.work_unit import WorkUnit


class Requirement(BaseModel):
    """Remediation cost rule for violations of one catalog rule."""

    model_config = ConfigDict(frozen=True)

    rule: RuleReference
    function: RemediationFunction
    factor: WorkUnit
    offset: WorkUnit = Field(default_factory=WorkUnit.zero)

    def cost(self, count: int) -> WorkUnit:
        """
        Remediation cost of `count` issues.

        LINEAR costs factor * count; LINEAR_WITH_OFFSET adds the offset once
        when there is at least one issue.
        """
        if count < 0:
            raise ValueError(f"Issue count cannot be negative: {count}")
        if count == 0:
            return WorkUnit.zero(hours_in_day=self.factor.hours_in_day)
        linear = self.factor * count
        if self.function is RemediationFunction.LINEAR_WITH_OFFSET:
            return linear + self.offset
        return linear
