"""Alembic migration scripts for SCHOOLBUS."""
