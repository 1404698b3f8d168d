"""Standard interfaces for search pipelines and their string-lookup collaborator."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from concurrent.futures import Future

from appsearch.contracts.app_search_v1 import ResultItem


class SearchPipeline(ABC):
    """Base class for all search pipelines feeding the search results list."""

    @abstractmethod
    def perform_search(
        self,
        query: str,
        callback: Callable[[list[ResultItem]], None],
    ) -> Future:
        """Start a search; `callback` receives the result rows exactly once."""


class StringResolver(ABC):
    """Resolves symbolic string ids to display text."""

    @abstractmethod
    def get_string(self, string_id: str) -> str:
        """Return display text for `string_id`."""


class DictStringResolver(StringResolver):
    """Looks labels up in a mapping; unknown ids resolve to the id itself."""

    def __init__(self, strings: Mapping[str, str]) -> None:
        self._strings = dict(strings)

    def get_string(self, string_id: str) -> str:
        return self._strings.get(string_id, string_id)
