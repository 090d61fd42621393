"""Field sets handed to entity stores on create/update.

Each kind enumerates its writable fields explicitly so a store never receives
a raw document node. Create payloads carry the resolved parent id; update
payloads never carry identifiers.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict

from currisync.domain.model.enums import EvaluationFormat, EvaluationMode, ResourceType


class DomainCreate(TypedDict):
    name: str
    color_code: str | None


class DomainUpdate(TypedDict, total=False):
    name: str
    color_code: str | None


class CompetencyUpdate(TypedDict):
    name: str
    description: str | None
    objectives: str | None


class CompetencyCreate(CompetencyUpdate):
    domain_id: str


class SubCompetencyUpdate(TypedDict):
    name: str
    description: str | None
    objectives: str | None
    level: NotRequired[int]


class SubCompetencyCreate(SubCompetencyUpdate):
    competency_id: str


class ResourceUpdate(TypedDict):
    type: ResourceType
    name: str
    description: str | None
    url: str | None
    file_key: str | None
    person_user_id: str | None


class ResourceCreate(ResourceUpdate):
    sub_competency_id: str


class EvaluationUpdate(TypedDict):
    name: str
    description: str | None
    mode: EvaluationMode
    format: EvaluationFormat
    duration_min: int | None
    url: str | None
    file_key: str | None


class EvaluationCreate(EvaluationUpdate):
    sub_competency_id: str
