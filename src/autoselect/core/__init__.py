"""Configuration, template rendering and debouncing."""

from .config import (
    AutocompleteConfig,
    load_configuration,
    normalize_configuration,
)
from .debounce import Debouncer
from .template import TemplateRenderer, extract_placeholders, render, resolve_path

__all__ = [
    "AutocompleteConfig",
    "load_configuration",
    "normalize_configuration",
    "Debouncer",
    "TemplateRenderer",
    "extract_placeholders",
    "render",
    "resolve_path",
]
