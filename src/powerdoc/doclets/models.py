"""Doclet records as emitted by the documentation parser."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _AttributeBag(BaseModel):
    """Free-form record: unknown keys are kept and new attributes may be set."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def get(self, key: str, default: Any = None) -> Any:
        """Return an attribute (declared or extra), or ``default`` when unset."""
        value = getattr(self, key, None)
        return default if value is None else value


class TypeExpression(_AttributeBag):
    """A parsed type expression; only the list of type names is used."""

    names: list[str] = Field(default_factory=list)


class DocletParam(_AttributeBag):
    """A parameter, return value, property or thrown exception."""

    name: str | None = None
    type: TypeExpression | None = None
    description: str | None = None
    optional: bool | None = None
    nullable: bool | None = None
    variable: bool | None = None
    defaultvalue: Any = None


class DocletMeta(_AttributeBag):
    """Where a doclet was found in the source tree."""

    path: str | None = None
    filename: str | None = None
    lineno: int | None = None
    shortpath: str | None = None


class Doclet(_AttributeBag):
    """A documentation record describing one code entity.

    Only the keys this package reads are declared; every other tag the parser
    emits is kept as an extra attribute. Publishing annotates doclets in place
    (``signature``, ``attribs``, ``id``, ``ancestors``, ``listeners`` ...).
    """

    kind: str | None = None
    name: str | None = None
    longname: str | None = None
    memberof: str | None = None
    scope: str | None = None
    access: str | None = None
    variation: str | None = None

    description: str | None = None
    summary: str | None = None
    classdesc: str | None = None

    meta: DocletMeta | None = None
    type: TypeExpression | None = None
    params: list[DocletParam] | None = None
    returns: list[DocletParam] | None = None
    properties: list[DocletParam] | None = None
    exceptions: list[DocletParam] | None = None

    examples: list[Any] | None = None
    see: list[str] | None = None
    listens: list[str] | None = None
    fires: list[str] | None = None
    augments: list[str] | None = None
    requires: list[str] | None = None
    author: list[str] | None = None
    version: str | None = None
    since: str | None = None

    readonly: bool | None = None
    nullable: bool | None = None
    optional: bool | None = None
    virtual: bool | None = None
    undocumented: bool | None = None
    ignore: bool | None = None

    def copy_deep(self) -> Doclet:
        """Return a deep copy that can be annotated without touching the original."""
        return self.model_copy(deep=True)
