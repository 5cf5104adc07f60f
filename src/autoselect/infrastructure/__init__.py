"""Infrastructure adapters for external collaborators."""

from .http_source import HttpSearchSource

__all__ = ["HttpSearchSource"]
