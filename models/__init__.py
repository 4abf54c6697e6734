from .database import Base, CacheEntry, get_engine, get_session_factory, init_db

__all__ = ['Base', 'CacheEntry', 'get_engine', 'get_session_factory', 'init_db']
