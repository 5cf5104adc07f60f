"""Autocomplete configuration parser and normalizer.

A configuration is either local (``data`` holds the candidate items) or
remote (``url`` names the endpoint handed to the search capability), never
both and never neither.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from autoselect.domain.errors import ConfigurationError
from autoselect.logger import get_logger

logger = get_logger("config")

DEFAULT_EMPTY_LIST_VIEW = "No match found!"
DEFAULT_LOADING_VIEW = "Loading data..."
DEFAULT_DEBOUNCE_INTERVAL = 0.25

# Optional text fields where an empty value means "use the default"
_DEFAULTED_FIELDS = (
    ("template", "template"),
    ("loading_view", "loadingView"),
    ("empty_list_view", "emptyListView"),
)


def default_template(value_field: str) -> str:
    """Template used when none is configured: show the value field."""
    return f"<div>#{value_field}#</div>"


class AutocompleteConfig(BaseModel):
    """Normalized, immutable autocomplete configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    key: str = Field(..., description="Field used as the item identity")
    value: str = Field(..., description="Field used as the display text")
    template: str = Field("", description="Suggestion template with #field.path# placeholders")
    name: Optional[str] = Field(None, description="Name given to the input")
    multiple: bool = Field(False, description="Allow selecting several items")
    loading_view: str = Field(DEFAULT_LOADING_VIEW, alias="loadingView")
    empty_list_view: str = Field(DEFAULT_EMPTY_LIST_VIEW, alias="emptyListView")
    data: Optional[list[Any]] = Field(None, description="Candidate items (local mode)")
    url: Optional[str] = Field(None, description="Remote source handed to the search capability")
    debounce_interval: float = Field(DEFAULT_DEBOUNCE_INTERVAL, ge=0, alias="debounceInterval")

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, raw: Any) -> Any:
        if not isinstance(raw, Mapping):
            return raw
        values = dict(raw)
        for field_name, alias in _DEFAULTED_FIELDS:
            for name in (field_name, alias):
                if name in values and not values[name]:
                    del values[name]
        if values.get("multiple") is None:
            values.pop("multiple", None)
        if not values.get("url"):
            values.pop("url", None)
        if "template" not in values and values.get("value"):
            values["template"] = default_template(values["value"])
        return values

    @model_validator(mode="after")
    def _check_source(self) -> "AutocompleteConfig":
        if self.data is not None and self.url is not None:
            raise ValueError("configuration must not define both 'data' and 'url'")
        if self.data is None and self.url is None:
            raise ValueError("configuration must define either 'data' (local) or 'url' (remote)")
        return self

    @property
    def is_local(self) -> bool:
        return self.data is not None

    @property
    def is_remote(self) -> bool:
        return self.url is not None


def normalize_configuration(raw: Mapping[str, Any] | AutocompleteConfig) -> AutocompleteConfig:
    """
    Fill unset optional fields with defaults and validate the configuration.

    Args:
        raw: Configuration mapping (snake_case or camelCase keys) or an
            already normalized configuration

    Returns:
        AutocompleteConfig: Normalized configuration

    Raises:
        ConfigurationError: If the structure is invalid or the configuration
            is not exactly one of local/remote
    """
    if isinstance(raw, AutocompleteConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(raw).__name__}")

    try:
        config = AutocompleteConfig.model_validate(raw)
    except ValidationError as e:
        error_msg = f"Invalid autocomplete configuration: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    logger.debug(
        f"Normalized configuration (key={config.key}, value={config.value}, "
        f"mode={'remote' if config.is_remote else 'local'}, multiple={config.multiple})"
    )
    return config


def load_configuration(config_path: str | Path) -> AutocompleteConfig:
    """
    Load an autocomplete configuration from a JSON file.

    Args:
        config_path: Path to the JSON configuration file

    Returns:
        AutocompleteConfig: Normalized configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ConfigurationError: If the configuration structure is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        error_msg = f"Autocomplete configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading autocomplete configuration from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise

    return normalize_configuration(data)
