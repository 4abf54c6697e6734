from .cache_store import CacheStore, CacheResult
from .data_fetcher import DataFetcher

__all__ = ['CacheStore', 'CacheResult', 'DataFetcher']
