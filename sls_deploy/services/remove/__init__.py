"""Teardown services.

Helpers that clean up deployment artifacts before the stack itself is removed.
"""
