"""Entity models for a vector database client: schemas, columns, indexes and rows."""

__version__ = "0.1.0"