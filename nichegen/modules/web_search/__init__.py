from .tavily_client import TavilySearchClient, SearchContext, NO_DATA_PLACEHOLDER

__all__ = ['TavilySearchClient', 'SearchContext', 'NO_DATA_PLACEHOLDER']
