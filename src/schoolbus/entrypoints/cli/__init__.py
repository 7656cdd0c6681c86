"""The ``schoolbus`` command line."""
