"""Characteristic nodes and the DebtModel aggregate."""

from collections.abc import Iterator
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from domain.remediation.requirement import Requirement
from domain.rules.reference import RuleReference


class Characteristic(BaseModel):
    """
    Named node of the remediation taxonomy (e.g. "Maintainability").

    Only root characteristics carry an order. parent_key is a plain
    back-reference; use DebtModel.parent_of() to navigate upward.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    name: str
    order: int | None = Field(default=None, ge=1)
    parent_key: str | None = None
    children: tuple["Characteristic", ...] = ()
    requirements: tuple[Requirement, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.parent_key is None

    def walk(self) -> Iterator["Characteristic"]:
        """Yield this characteristic then its descendants, depth-first in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def requirement_for(self, rule: RuleReference) -> Requirement | None:
        for requirement in self.requirements:
            if requirement.rule == rule:
                return requirement
        return None


class DebtModel(BaseModel):
    """Ordered root characteristics plus a key index over every subtree."""

    model_config = ConfigDict(frozen=True)

    roots: tuple[Characteristic, ...] = ()

    @cached_property
    def _index(self) -> dict[str, Characteristic]:
        """Key -> characteristic, built in pre-order so a later duplicate key wins."""
        return {characteristic.key: characteristic for characteristic in self.characteristics()}

    @property
    def root_characteristics(self) -> list[Characteristic]:
        return list(self.roots)

    def characteristics(self) -> Iterator[Characteristic]:
        """Every characteristic, depth-first in document order."""
        for root in self.roots:
            yield from root.walk()

    def characteristic_by_key(self, key: str) -> Characteristic | None:
        return self._index.get(key)

    def parent_of(self, characteristic: Characteristic) -> Characteristic | None:
        if characteristic.parent_key is None:
            return None
        return self._index.get(characteristic.parent_key)

    def keys(self) -> set[str]:
        return set(self._index)

    def requirements(self) -> list[Requirement]:
        return [requirement for characteristic in self.characteristics() for requirement in characteristic.requirements]

    def requirement_for_rule(self, rule: RuleReference) -> Requirement | None:
        for characteristic in self.characteristics():
            requirement = characteristic.requirement_for(rule)
            if requirement is not None:
                return requirement
        return None

    def is_empty(self) -> bool:
        return not self.roots
