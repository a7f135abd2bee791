"""Exceptions shared across modules.

``DependencyError`` marks a failure of an external collaborator (database,
SMS gateway, waybill allocator) as opposed to bad caller input.  The API
layer renders it as a generic server error with the cause attached.
"""

from __future__ import annotations


class DependencyError(Exception):
    """An external collaborator failed while serving the request."""
