"""Power-mode switches read from the ``powerMode`` configuration section."""

from collections.abc import Mapping
from typing import Any

import logfire
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class PowerModeConfig(BaseModel):
    """The two power-mode flags.

    A flag keeps its configured value only when that value is a real boolean.
    Strings, numbers, null and missing keys all fall back to the default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    display_static_members: bool = Field(
        default=False,
        alias="displayStaticMembers",
        description="List static members of each item in the navigation sidebar",
    )
    sort: bool = Field(
        default=True,
        description="Sort doclets by longname, version and since before rendering",
    )

    @field_validator("display_static_members", "sort", mode="before")
    @classmethod
    def _true_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is True or value is False:
            return value
        return cls.model_fields[info.field_name].default

    def should_display_static_members(self) -> bool:
        return self.display_static_members

    def should_sort(self) -> bool:
        return self.sort


def parse(obj: Mapping[str, Any] | PowerModeConfig | None) -> PowerModeConfig:
    """Parse a ``powerMode`` section.

    Args:
        obj: Raw section from the configuration file, or None.

    Returns:
        PowerModeConfig with defaults for anything missing or malformed.
    """
    if isinstance(obj, PowerModeConfig):
        return obj
    if not isinstance(obj, Mapping):
        return PowerModeConfig()
    return PowerModeConfig.model_validate(dict(obj))


def load_from_conf(conf: Any) -> PowerModeConfig:
    """Build the power-mode flags from a loaded publish configuration.

    Args:
        conf: A PublishConf (or anything exposing ``power_mode``), or None.

    Returns:
        Parsed flags; defaults when the configuration has no ``powerMode``.
    """
    raw = getattr(conf, "power_mode", None) if conf is not None else None
    logfire.debug("Loaded power mode configuration", power_mode=raw)
    return parse(raw)
