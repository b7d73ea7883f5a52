"""Result storage: in-memory LRU and SQLite-backed stores."""

from docclassify.storage.base import ResultStorage
from docclassify.storage.memory import MemoryResultStorage
from docclassify.storage.sqlite import SQLiteResultStorage
from docclassify.storage.stats import StorageStats

__all__ = ["ResultStorage", "MemoryResultStorage", "SQLiteResultStorage", "StorageStats"]
