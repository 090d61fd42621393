"""Pydantic models describing the portable tree document.

The document is a snapshot, not a live object: every ``id`` is optional and
only claims a reference to an existing entity. Below the domain node the models
are lenient: ill-typed values decode as ``None`` and non-object list entries
decode as empty nodes, which the reconcilers later skip for lacking a name. A
non-zero number given as a name is kept as text. ``level`` and ``durationMin``
only accept whole numbers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text_or_none(value: object) -> object:
    return value if isinstance(value, str) else None


def _name_or_none(value: object) -> object:
    # a truthy number still names a node; it is kept as text
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, int | float) or not value:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _id_or_none(value: object) -> object:
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _int_or_none(value: object) -> object:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _node_list(value: object) -> object:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, Mapping) else {} for item in value]


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TreeNode(DocumentModel):
    id: str | None = None

    _normalize_id = field_validator("id", mode="before")(_id_or_none)


class ResourceNode(TreeNode):
    type: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    file_key: str | None = Field(default=None, alias="fileKey")
    person_user_id: str | None = Field(default=None, alias="personUserId")

    _normalize_name = field_validator("name", mode="before")(_name_or_none)
    _normalize_text = field_validator(
        "type", "description", "url", "file_key", "person_user_id", mode="before"
    )(_text_or_none)


class EvaluationNode(TreeNode):
    name: str | None = None
    description: str | None = None
    mode: str | None = None
    format: str | None = None
    duration_min: int | None = Field(default=None, alias="durationMin")
    url: str | None = None
    file_key: str | None = Field(default=None, alias="fileKey")

    _normalize_name = field_validator("name", mode="before")(_name_or_none)
    _normalize_text = field_validator(
        "description", "mode", "format", "url", "file_key", mode="before"
    )(_text_or_none)
    _normalize_duration = field_validator("duration_min", mode="before")(_int_or_none)


class SubCompetencyNode(TreeNode):
    name: str | None = None
    description: str | None = None
    objectives: str | None = None
    level: int | None = None
    resources: list[ResourceNode] = Field(default_factory=list["ResourceNode"])
    evaluations: list[EvaluationNode] = Field(default_factory=list["EvaluationNode"])

    _normalize_name = field_validator("name", mode="before")(_name_or_none)
    _normalize_text = field_validator("description", "objectives", mode="before")(_text_or_none)
    _normalize_level = field_validator("level", mode="before")(_int_or_none)
    _normalize_children = field_validator("resources", "evaluations", mode="before")(_node_list)


class CompetencyNode(TreeNode):
    name: str | None = None
    description: str | None = None
    objectives: str | None = None
    sub_competencies: list[SubCompetencyNode] = Field(
        default_factory=list["SubCompetencyNode"], alias="subCompetencies"
    )

    _normalize_name = field_validator("name", mode="before")(_name_or_none)
    _normalize_text = field_validator("description", "objectives", mode="before")(_text_or_none)
    _normalize_children = field_validator("sub_competencies", mode="before")(_node_list)


class DomainNode(TreeNode):
    name: str
    color_code: str | None = Field(default=None, alias="colorCode")

    _normalize_color = field_validator("color_code", mode="before")(_text_or_none)

    @property
    def color_code_provided(self) -> bool:
        """Whether the document mentioned ``colorCode`` at all (``null`` included)."""
        return "color_code" in self.model_fields_set


class Document(DocumentModel):
    domain: DomainNode
    competencies: list[CompetencyNode]

    _normalize_children = field_validator("competencies", mode="before")(_node_list)

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON-compatible mapping of this document."""
        return self.model_dump(mode="json", by_alias=True)
