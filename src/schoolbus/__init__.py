"""SCHOOLBUS

Driver credentialing for school-bus transportation: driver registration,
license updates, safety-incident scoring and eligibility checks, stored in a
keyed record store.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
