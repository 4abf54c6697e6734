from sqlalchemy import create_engine, Column, String, Float, Text
from sqlalchemy.orm import declarative_base, sessionmaker

from loaders.config import DEFAULT_CACHE_DB_URL

Base = declarative_base()


class CacheEntry(Base):
    """
    One cached value with an absolute expiry.

    The API only ever uses a single key, but the table is a plain key-value
    store so a schema bump (all_rows_v2) can coexist with the old entry until
    it expires.
    """
    __tablename__ = 'cache_entries'

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    expires_at = Column(Float, nullable=False, index=True)  # Unix timestamp

    def __repr__(self):
        return f"<CacheEntry {self.key} expires_at={self.expires_at}>"


def get_engine(db_url=DEFAULT_CACHE_DB_URL):
    return create_engine(db_url)


def get_session_factory(engine):
    return sessionmaker(bind=engine)


def init_db(engine):
    """Create the cache table if it does not exist yet."""
    Base.metadata.create_all(engine)
