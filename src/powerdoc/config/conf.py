"""Publish configuration file and publish options."""

import codecs
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Bundled template shipped with the package
DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "default"


class StaticFilesConfig(BaseModel):
    """User static files copied next to the generated pages."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    include: list[str] | None = Field(
        default=None,
        description="Files or directories to copy into the output directory",
    )
    # Accepted for backwards compatibility; ``include`` wins when both are set.
    paths: list[str] | None = None
    exclude: list[str] | None = Field(
        default=None,
        description="Path prefixes that are never copied",
    )
    include_pattern: str | None = Field(default=None, alias="includePattern")
    exclude_pattern: str | None = Field(default=None, alias="excludePattern")

    def include_paths(self) -> list[str]:
        """Return the configured include paths, preferring ``include``."""
        return self.include or self.paths or []


class DefaultTemplateConfig(BaseModel):
    """The ``templates.default`` section."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    layout_file: str | None = Field(default=None, alias="layoutFile")
    output_source_files: bool = Field(default=True, alias="outputSourceFiles")
    static_files: StaticFilesConfig | None = Field(default=None, alias="staticFiles")

    @field_validator("output_source_files", mode="before")
    @classmethod
    def _anything_but_false(cls, value: Any) -> bool:
        return value is not False


class TemplatesConfig(BaseModel):
    """The ``templates`` section."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    clever_links: bool = Field(default=False, alias="cleverLinks")
    monospace_links: bool = Field(default=False, alias="monospaceLinks")
    use_short_names_in_links: bool = Field(default=False, alias="useShortNamesInLinks")
    default: DefaultTemplateConfig = Field(default_factory=DefaultTemplateConfig)


class PublishConf(BaseModel):
    """Publish configuration, usually loaded from ``conf.json`` or ``powerdoc.yml``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    power_mode: Any = Field(default=None, alias="powerMode")

    # Directory relative paths in the file are resolved against
    base_dir: Path | None = Field(default=None, exclude=True)

    def resolve_path(self, value: str | Path) -> Path:
        """Resolve a path from the configuration file against its directory."""
        path = Path(value).expanduser()
        if path.is_absolute() or self.base_dir is None:
            return path
        return self.base_dir / path


class PublishOptions(BaseModel):
    """Options handed to ``publish`` alongside the doclets and tutorials."""

    destination: Path = Path("./out/")
    template: Path = Field(default_factory=lambda: DEFAULT_TEMPLATE_PATH)
    encoding: str = "utf8"
    readme: str | None = Field(default=None, description="README rendered as HTML")
    mainpagetitle: str | None = None
    private: bool = False
    access: list[str] | None = None

    def normalized_encoding(self) -> str:
        """Map the configured encoding to a Python codec name.

        Raises:
            ValueError: If the encoding is unknown.
        """
        try:
            return codecs.lookup(self.encoding or "utf8").name
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e


def parse_conf(content: str, base_dir: Path | None = None) -> PublishConf:
    """Parse a publish configuration from JSON or YAML text.

    Args:
        content: Raw file content. JSON is accepted since it is valid YAML.
        base_dir: Directory used to resolve relative paths in the file.

    Returns:
        Parsed PublishConf with defaults for missing sections.

    Raises:
        ValueError: If the content is not a valid mapping.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if data is None:
        return PublishConf(base_dir=base_dir)

    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    conf = PublishConf.model_validate(data)
    conf.base_dir = base_dir
    return conf


def load_conf(path: Path | str) -> PublishConf:
    """Load a publish configuration file.

    Args:
        path: Path to a JSON or YAML configuration file.

    Returns:
        Parsed PublishConf whose relative paths resolve against the file's directory.
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    return parse_conf(content, base_dir=path.resolve().parent)
