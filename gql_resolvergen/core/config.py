"""Translation configuration.

Configuration can come from several layers (a JSON config file, CLI flags,
keyword overrides). Layers are merged left to right and the last layer that
sets an option wins.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)


class TranslationConfig(BaseModel):
    """Options recognized by the translator."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    internal_enum_value_support: bool = Field(
        default=False, alias="internalEnumValueSupport"
    )
    context_type: str = Field(default="{}", alias="contextType")
    internal_reps_type: str = Field(default="{}", alias="internalRepsType")
    banner_command: str = Field(default="gql-resolvergen generate", alias="bannerCommand")


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a JSON config file and return the options it sets.

    Only the keys present in the file are returned so that the result can
    be used as a layer in :func:`merge_config`.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    try:
        TranslationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    return data


def merge_config(*layers: dict[str, Any] | TranslationConfig | None) -> TranslationConfig:
    """Merge configuration layers, later layers overriding earlier ones.

    When two layers disagree on the enum encoding mode the last one wins and
    a warning names both values.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        if isinstance(layer, TranslationConfig):
            values = layer.model_dump(exclude_unset=True)
        else:
            try:
                values = TranslationConfig.model_validate(layer).model_dump(exclude_unset=True)
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration: {e}") from e

        previous = merged.get("internal_enum_value_support")
        current = values.get("internal_enum_value_support")
        if previous is not None and current is not None and previous != current:
            logger.warning(
                "Conflicting enum encoding options (internalEnumValueSupport=%s, then %s); "
                "using the last one",
                previous,
                current,
            )
        merged.update(values)
    return TranslationConfig(**merged)
