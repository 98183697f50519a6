"""
Domain exceptions for the view factory engine.

Notes
-----
The engine is permissive by default: lookup misses, unknown persisted tags and
mismatched rule targets degrade to no-ops. These exceptions are raised only by
factories constructed with ``strict=True``.
"""

from __future__ import annotations


class ViewFactoryError(RuntimeError):
    """Base exception for all view factory failures."""


class InvalidTagError(ViewFactoryError):
    """Raised when a tag cannot be represented as a single persisted token."""


class UnknownTagError(ViewFactoryError):
    """Raised when a persisted token is not a member of the factory's tag type."""


class ViewTypeMismatchError(ViewFactoryError):
    """Raised when a rule is invoked against a view outside its registered type."""
