"""
Client for interacting with the Tavily Search API.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tavily import TavilyClient

logger = logging.getLogger(__name__)

NO_DATA_PLACEHOLDER = "No real-time data found."


@dataclass
class SearchContext:
    """Search output: a text block for the model and citations for the client."""
    text: str
    sources: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'SearchContext':
        return cls(text=NO_DATA_PLACEHOLDER, sources=[])


class TavilySearchClient:
    """
    Web search adapter. Never raises: every failure degrades to
    ``SearchContext.empty()``.
    """

    def __init__(self,
                 api_key: str,
                 max_results: int = 5,
                 search_depth: str = "advanced",
                 topic: str = "general",
                 client: Optional[Any] = None):
        self.max_results = max_results
        self.search_depth = search_depth
        self.topic = topic

        if client is not None:
            self._client = client
        elif api_key:
            self._client = TavilyClient(api_key=api_key)
            logger.info("Tavily client initialized successfully")
        else:
            logger.warning("TAVILY_API_KEY not set. Web search functionality will be disabled.")
            self._client = None

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def search(self, query: str) -> SearchContext:
        """
        Performs a web search using the Tavily API.

        Args:
            query: The search query string.

        Returns:
            SearchContext with one ``SOURCE/CONTENT/URL`` block per result.
        """
        if not self.enabled:
            return SearchContext.empty()

        if not query or not query.strip():
            return SearchContext.empty()

        try:
            logger.info(f"Performing Tavily search for query: '{query[:80]}'")
            response = self._client.search(
                query=query,
                search_depth=self.search_depth,
                max_results=self.max_results,
                topic=self.topic,
            )
        except Exception as e:
            logger.error(f"Tavily Search Error for query '{query[:80]}': {e}", exc_info=True)
            return SearchContext.empty()

        results = (response or {}).get('results') or []
        if not results:
            logger.info(f"No search results found for '{query[:80]}'")
            return SearchContext.empty()

        blocks = []
        sources = []
        for result in results:
            title = result.get('title', 'N/A')
            url = result.get('url', '')
            blocks.append(f"SOURCE: {title}\nCONTENT: {result.get('content', '')}\nURL: {url}")
            sources.append({'title': title, 'url': url})

        return SearchContext(text='\n\n'.join(blocks), sources=sources)
