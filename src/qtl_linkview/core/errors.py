"""Error types raised while building or driving a linked view."""

from __future__ import annotations


class LinkViewError(Exception):
    """Base class for all qtl-linkview errors."""


class ConfigurationError(LinkViewError, ValueError):
    """Options or paired inputs that cannot produce a valid view.

    Raised at build time, before anything is drawn.
    """


class OutOfDomainError(LinkViewError, LookupError):
    """A chromosome, position, cell key or entity index that was never bound."""


class DataShapeError(LinkViewError, ValueError):
    """Matrix or dataset dimensions that disagree with each other."""
