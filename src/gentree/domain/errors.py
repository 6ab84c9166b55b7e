from __future__ import annotations

"""
Domain Exception Hierarchy.

Every failure surfaced by the generated file tree derives from
GeneratedTreeError so that callers (build steps, the CLI) can trap the
whole family with a single handler.
"""


class GeneratedTreeError(Exception):
    """Base class for all generated file tree failures."""


class GenerationError(GeneratedTreeError, OSError):
    """
    The content generator, or the sink it writes into, failed.

    Fatal for the current resolution. The original OSError is chained
    as __cause__.
    """


class UnsupportedOperationError(GeneratedTreeError):
    """
    Caller requested something the single-file abstraction cannot model.

    Raised for directory visitation and for opening raw generated content
    as a readable stream.
    """


class ConfigError(GeneratedTreeError, ValueError):
    """Invalid configuration value rejected in strict validation mode."""
