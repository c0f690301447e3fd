from .config import DEFAULT_CHUNK_SIZE, StoreConfig, load_settings

__all__ = ["DEFAULT_CHUNK_SIZE", "StoreConfig", "load_settings"]
