"""Base classes for registry search providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..clients.exceptions import RegistryError
from ..clients.fetch import fetch_json
from ..models.base import RegistryKind
from ..models.package import PackageSummary, SearchOutcome
from .detector import RegistryInfo, get_registry_info

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_LIMIT = 20

_T = TypeVar("_T", bound=BaseModel)


class UpstreamModel(BaseModel):
    """Permissive schema for third-party JSON: unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def parse_items(raw: Any, schema: Type[_T]) -> Iterator[_T]:
    """Validate each element of a JSON array, skipping malformed ones."""
    if not isinstance(raw, list):
        return
    for item in raw:
        try:
            yield schema.model_validate(item)
        except ValidationError as e:
            logger.debug(f"Skipping malformed {schema.__name__} item: {e}")


def clean_keywords(keywords: Optional[Iterable[Any]]) -> List[str]:
    if not keywords:
        return []
    return [str(k) for k in keywords if k]


class BaseRegistryProvider(ABC):
    """One registry's public search endpoint."""

    kind: RegistryKind
    label: str

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    @property
    def info(self) -> RegistryInfo:
        return get_registry_info(self.kind)

    @abstractmethod
    def search_params(self, query: str, limit: int) -> Dict[str, Any]:
        """Query parameters understood by the registry's search endpoint."""
        pass

    @abstractmethod
    def parse_results(self, data: Any) -> Tuple[List[PackageSummary], Optional[int]]:
        """Map the upstream payload to (packages, total)."""
        pass

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> SearchOutcome:
        """Search the registry.

        Never raises for upstream failures; they are reported in
        ``SearchOutcome.error`` with an empty package list.
        """
        logger.info(f"Searching {self.label} with query: '{query}' (limit={limit})")
        try:
            data = await fetch_json(
                self.info.search_url,
                params=self.search_params(query, limit),
                timeout=self.timeout,
                label=f"{self.label} search",
            )
            packages, total = self.parse_results(data)
        except RegistryError as e:
            return self._search_failed(query, e)
        except (ValueError, TypeError, AttributeError) as e:
            return self._search_failed(query, e)

        logger.info(f"{self.label} returned {len(packages)} packages")
        return SearchOutcome(
            query=query,
            registry=self.kind,
            packages=packages,
            total=total,
        )

    def _search_failed(self, query: str, error: Exception) -> SearchOutcome:
        logger.warning(f"{self.label} search failed for '{query}': {error}")
        return SearchOutcome(
            query=query,
            registry=self.kind,
            packages=[],
            error=str(error),
        )
