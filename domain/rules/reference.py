"""Rule identifiers."""

from pydantic import BaseModel, ConfigDict, Field


class RuleReference(BaseModel):
    """Repository + key pair identifying a rule (case-sensitive)."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return f"{self.repository}:{self.key}"


class Rule(BaseModel):
    """A rule known to the catalog."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)
    name: str | None = None

    @property
    def reference(self) -> RuleReference:
        return RuleReference(repository=self.repository, key=self.key)
