"""Core value types for linkset."""

from linkset.models.category import Category, classify, collection_keys, same_keys
from linkset.models.change import LeafChange
from linkset.models.config import LinkSetConfig, LogConfig

__all__ = [
    "Category",
    "LeafChange",
    "LinkSetConfig",
    "LogConfig",
    "classify",
    "collection_keys",
    "same_keys",
]
