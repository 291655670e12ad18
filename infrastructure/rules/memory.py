"""In-memory rule catalog."""

import logging
from collections.abc import Iterable

from domain.rules import Rule, RuleCatalog

logger = logging.getLogger(__name__)


class InMemoryRuleCatalog(RuleCatalog):
    """Catalog backed by a fixed set of rules."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: dict[tuple[str, str], Rule] = {}
        for rule in rules:
            self._rules[(rule.repository, rule.key)] = rule
        logger.debug("Initialized in-memory rule catalog with %d rules", len(self._rules))

    @classmethod
    def of(cls, *references: str) -> "InMemoryRuleCatalog":
        """
        Build a catalog from "repository:key" strings.

        Examples:
            >>> InMemoryRuleCatalog.of("checkstyle:Regexp").contains("checkstyle", "Regexp")
            True
        """
        rules = []
        for reference in references:
            repository, sep, key = reference.partition(":")
            if not sep:
                raise ValueError(f"Expected 'repository:key', got {reference!r}")
            rules.append(Rule(repository=repository, key=key))
        return cls(rules)

    def find(self, repository: str, key: str) -> Rule | None:
        return self._rules.get((repository, key))

    def __len__(self) -> int:
        return len(self._rules)
