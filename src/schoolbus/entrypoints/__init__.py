"""Entrypoints (inbound adapters) for SCHOOLBUS.

Parse and validate user input, hand commands and queries to the message bus
and present the results. Currently only the ``schoolbus`` CLI.
"""
