"""Search-side interface: searches tracking solutions and their listeners."""

from .abc_search import LocalSearch, Search
from .listeners import LocalSearchListener, SearchListener

__all__ = ['LocalSearch', 'Search', 'LocalSearchListener', 'SearchListener']
