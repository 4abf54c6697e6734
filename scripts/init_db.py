import sys
import os

# Add project root to sys.path
sys.path.append(os.getcwd())

from loaders import SourceConfig
from models import get_engine, Base, init_db


def reset_cache_db():
    config = SourceConfig.from_env()
    print(f"Initializing cache database at {config.cache_db_url}...")
    engine = get_engine(config.cache_db_url)
    Base.metadata.drop_all(engine)
    init_db(engine)
    print("Cache table created.")


if __name__ == "__main__":
    reset_cache_db()
