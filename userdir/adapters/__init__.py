"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations of ``UserSourcePort`` (the HTTP user
    directory and an in-memory source) plus the shared transport and error
    types they raise.

Dependencies:
    ``requests`` for network I/O; domain entities and port definitions.

Call context:
    Imported by ``userdir.web_ui.runtime`` for runtime wiring and by tests for
    transport-level behavior verification.
"""
