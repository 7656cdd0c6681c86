"""Service layer for SCHOOLBUS.

Implements application use-cases: command/query handlers, orchestration, and
transaction boundaries. Calls domain objects and outbound ports defined by the
domain.

Dependency rule: may import `schoolbus.domain`, but not `schoolbus.adapters` or
`schoolbus.entrypoints`.
"""
