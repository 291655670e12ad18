"""Rule catalog port consumed by the importer."""

from abc import ABC, abstractmethod

from domain.rules.reference import Rule, RuleReference


class RuleCatalog(ABC):
    """
    Abstract lookup of known rules.

    All concrete catalogs must implement:
    - find(): resolve a repository + key to a Rule, or None when unknown

    Lookups may be slow (I/O bound); caching is up to the implementation.
    """

    @abstractmethod
    def find(self, repository: str, key: str) -> Rule | None:
        """Return the rule registered under (repository, key), or None."""
        raise NotImplementedError

    def find_reference(self, reference: RuleReference) -> Rule | None:
        return self.find(reference.repository, reference.key)

    def contains(self, repository: str, key: str) -> bool:
        return self.find(repository, key) is not None
