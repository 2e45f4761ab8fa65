"""Message template catalog."""

from catalog.properties import (
    DuplicateKeyError,
    MessageCatalog,
    find_key_location,
    insert_key,
    load_catalog,
    parse_properties,
)

__all__ = [
    "DuplicateKeyError",
    "MessageCatalog",
    "find_key_location",
    "insert_key",
    "load_catalog",
    "parse_properties",
]
