"""Interfaces (application boundary) for SCHOOLBUS.

Defines framework-free application contracts: protocols/ABCs and small DTOs
shared by the service layer and adapters (e.g., the keyed record store and
the unit of work). Business rules stay out of this package.

Dependency rule: import nothing from other
`schoolbus.*` modules. It may be imported by `schoolbus.service_layer`,
`schoolbus.adapters`, and `schoolbus.bootstrap`.
"""
