"""Memoizing wrapper around a slow rule finder."""

import logging
import threading
from collections.abc import Callable, Iterable

from domain.rules import Rule, RuleCatalog

logger = logging.getLogger(__name__)

RuleFinder = Callable[[str], Iterable[Rule]]


class CachedRuleCatalog(RuleCatalog):
    """
    Catalog loading each repository's rules once, on first lookup.

    `finder(repository)` returns every rule of a repository; it may be slow
    (database, remote service). Results are kept until invalidate().
    """

    def __init__(self, finder: RuleFinder) -> None:
        self._finder = finder
        self._by_repository: dict[str, dict[str, Rule]] = {}
        self._lock = threading.Lock()

    def _rules_of(self, repository: str) -> dict[str, Rule]:
        with self._lock:
            cached = self._by_repository.get(repository)
            if cached is None:
                cached = {rule.key: rule for rule in self._finder(repository) if rule.repository == repository}
                self._by_repository[repository] = cached
                logger.debug("Loaded %d rules for repository=%s", len(cached), repository)
            return cached

    def find(self, repository: str, key: str) -> Rule | None:
        return self._rules_of(repository).get(key)

    def invalidate(self) -> None:
        with self._lock:
            self._by_repository.clear()
