"""Database glue: engine factory, metadata, column types and migrations."""
