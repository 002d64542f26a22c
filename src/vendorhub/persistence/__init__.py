from .memory import FileKeyValueStore, InMemoryKeyValueStore
from .protocols import KeyValueStore
from .registry import (
    CSV_HEADER,
    DEFAULT_REGISTRY_KEY,
    RegistryCounts,
    VendorRegistry,
    export_csv,
    write_csv_file,
)

__all__ = [
    "CSV_HEADER",
    "DEFAULT_REGISTRY_KEY",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RegistryCounts",
    "VendorRegistry",
    "export_csv",
    "write_csv_file",
]
