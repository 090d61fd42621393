"""Pydantic models describing the data API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from currisync.domain.model import EvaluationFormat, EvaluationMode, ResourceType


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


def _none_to_zero(value: object) -> object:
    return 0 if value is None else value


class DataApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResourcePayload(DataApiBaseModel):
    id: str
    sub_competency_id: str | None = Field(default=None, alias="subCompetencyId")
    type: ResourceType
    name: str
    description: str | None = None
    url: str | None = None
    file_key: str | None = Field(default=None, alias="fileKey")
    person_user_id: str | None = Field(default=None, alias="personUserId")


class EvaluationPayload(DataApiBaseModel):
    id: str
    sub_competency_id: str | None = Field(default=None, alias="subCompetencyId")
    name: str
    mode: EvaluationMode
    format: EvaluationFormat
    description: str | None = None
    duration_min: int | None = Field(default=None, alias="durationMin")
    url: str | None = None
    file_key: str | None = Field(default=None, alias="fileKey")


class SubCompetencyPayload(DataApiBaseModel):
    id: str
    competency_id: str | None = Field(default=None, alias="competencyId")
    name: str
    description: str | None = None
    objectives: str | None = None
    level: int = 0
    resources: list[ResourcePayload] = Field(default_factory=list["ResourcePayload"])
    evaluations: list[EvaluationPayload] = Field(default_factory=list["EvaluationPayload"])

    _normalize_level = field_validator("level", mode="before")(_none_to_zero)
    _normalize_children = field_validator("resources", "evaluations", mode="before")(
        _none_to_empty_list
    )


class CompetencyPayload(DataApiBaseModel):
    id: str
    domain_id: str | None = Field(default=None, alias="domainId")
    name: str
    description: str | None = None
    objectives: str | None = None
    sub_competencies: list[SubCompetencyPayload] = Field(
        default_factory=list["SubCompetencyPayload"], alias="subCompetencies"
    )

    _normalize_children = field_validator("sub_competencies", mode="before")(_none_to_empty_list)


class DomainPayload(DataApiBaseModel):
    id: str
    name: str
    color_code: str | None = Field(default=None, alias="colorCode")
    competencies: list[CompetencyPayload] = Field(default_factory=list["CompetencyPayload"])

    _normalize_children = field_validator("competencies", mode="before")(_none_to_empty_list)


class ErrorPayload(DataApiBaseModel):
    message: str
    code: str | None = None
