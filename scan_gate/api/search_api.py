"""Client for the search service."""

from typing import Callable, List, TypeVar, Dict, Any, Optional

import requests

from .base import ApiClient
from .models import SearchRequest, SearchPage

T = TypeVar("T")


class SearchApi(ApiClient):
    """Runs queries in the search service's native filter language."""

    def __init__(self, base_url: str, api_key: str, page_size: int = 50,
                 session: Optional[requests.Session] = None, **kwargs):
        super().__init__(base_url, api_key, session=session, **kwargs)
        self.page_size = page_size

    def search(self, request: SearchRequest, index: int = 0) -> SearchPage:
        """Fetch a single page of results."""
        params = {"index": index, "size": self.page_size}
        response = self._expect(
            self._make_request("POST", "/search", json=request.to_dict(), params=params)
        )
        return self._parse(response, SearchPage.from_dict)

    def search_all(self, request: SearchRequest,
                   parser: Callable[[Dict[str, Any]], T]) -> List[T]:
        """Fetch every page of results and parse each item.

        Args:
            request: Search type and query
            parser: Converts one JSON item into a result object

        Returns:
            All matching items, in service order
        """
        results: List[T] = []
        index = 0

        while True:
            page = self.search(request, index)
            results.extend(parser(item) for item in page.data)

            # The page count drives paging; the echoed index is not trusted
            if index + 1 >= page.metadata.total_pages or not page.data:
                break
            index += 1

        self.logger.debug(f"Search returned {len(results)} items over {index + 1} pages")
        return results
