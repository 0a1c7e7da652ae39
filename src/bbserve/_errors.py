"""bbserve error hierarchy.

All bbserve-specific errors inherit from BBServeError for easy catching.
"""


class BBServeError(Exception):
    """Base error for all bbserve operations."""


class ConfigError(BBServeError):
    """Invalid or missing configuration."""


class TemplateError(BBServeError):
    """Error wiring templates or the theme into the app."""
