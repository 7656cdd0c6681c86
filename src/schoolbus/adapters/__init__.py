"""Adapters (infrastructure) for SCHOOLBUS.

Provide concrete implementations of the application ports (the keyed record
store and the unit of work), plus persistence mapping and related wiring
(engines, metadata, migrations).

Dependency rule: may import `schoolbus.domain`; the domain must not import this
package.
"""
