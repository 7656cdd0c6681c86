"""Bootstrap (composition root) for SCHOOLBUS.

Wires a unit of work (SQL or in-memory) into the driver handlers and hands
back a message bus. No business rules live here.

Inner layers must not import `schoolbus.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, bootstrap_in_memory

__all__ = ["AppContainer", "bootstrap", "bootstrap_in_memory"]
