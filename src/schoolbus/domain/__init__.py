"""Domain layer for SCHOOLBUS.

Contains business rules: driver and incident records, safety scoring and
eligibility. This package is deliberately technology-agnostic.

Dependency rule: do not import from `schoolbus.adapters` or `schoolbus.entrypoints`.
"""
