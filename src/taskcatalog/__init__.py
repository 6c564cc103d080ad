"""taskcatalog — reference sync, validation, and indexing for task documents."""

__version__ = "0.1.0"
