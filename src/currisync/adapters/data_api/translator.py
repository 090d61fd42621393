"""Translate data API payloads into live entities and store inputs into request bodies."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from currisync.domain.model import Competency, Domain, Evaluation, Resource, SubCompetency

from .errors import DataApiError
from .schema import (
    CompetencyPayload,
    DomainPayload,
    EvaluationPayload,
    ResourcePayload,
    SubCompetencyPayload,
)


def to_request_body(data: Mapping[str, object]) -> dict[str, object]:
    """Render a store input as the camelCase JSON body the API expects."""

    body: dict[str, object] = {}
    for key, value in data.items():
        body[to_camel(key)] = value.value if isinstance(value, Enum) else value
    return body


def _validate[TModel: BaseModel](model: type[TModel], raw: object) -> TModel:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        message = f"Unexpected {model.__name__} payload: {exc.error_count()} error(s)"
        raise DataApiError(message) from exc


def _parent_id(own: str | None, inherited: str | None, *, field_name: str) -> str:
    parent_id = own or inherited
    if parent_id is None:
        raise DataApiError(f"Response payload is missing {field_name}")
    return parent_id


def to_resource(payload: ResourcePayload, *, sub_competency_id: str | None = None) -> Resource:
    return Resource(
        id=payload.id,
        sub_competency_id=_parent_id(
            payload.sub_competency_id, sub_competency_id, field_name="subCompetencyId"
        ),
        type=payload.type,
        name=payload.name,
        description=payload.description,
        url=payload.url,
        file_key=payload.file_key,
        person_user_id=payload.person_user_id,
    )


def to_evaluation(
    payload: EvaluationPayload, *, sub_competency_id: str | None = None
) -> Evaluation:
    return Evaluation(
        id=payload.id,
        sub_competency_id=_parent_id(
            payload.sub_competency_id, sub_competency_id, field_name="subCompetencyId"
        ),
        name=payload.name,
        mode=payload.mode,
        format=payload.format,
        description=payload.description,
        duration_min=payload.duration_min,
        url=payload.url,
        file_key=payload.file_key,
    )


def to_sub_competency(
    payload: SubCompetencyPayload, *, competency_id: str | None = None
) -> SubCompetency:
    sub = SubCompetency(
        id=payload.id,
        competency_id=_parent_id(payload.competency_id, competency_id, field_name="competencyId"),
        name=payload.name,
        description=payload.description,
        objectives=payload.objectives,
        level=payload.level,
    )
    sub.resources = [to_resource(item, sub_competency_id=sub.id) for item in payload.resources]
    sub.evaluations = [
        to_evaluation(item, sub_competency_id=sub.id) for item in payload.evaluations
    ]
    return sub


def to_competency(payload: CompetencyPayload, *, domain_id: str | None = None) -> Competency:
    competency = Competency(
        id=payload.id,
        domain_id=_parent_id(payload.domain_id, domain_id, field_name="domainId"),
        name=payload.name,
        description=payload.description,
        objectives=payload.objectives,
    )
    competency.sub_competencies = [
        to_sub_competency(item, competency_id=competency.id) for item in payload.sub_competencies
    ]
    return competency


def to_domain(payload: DomainPayload) -> Domain:
    domain = Domain(id=payload.id, name=payload.name, color_code=payload.color_code)
    domain.competencies = [
        to_competency(item, domain_id=domain.id) for item in payload.competencies
    ]
    return domain


def parse_domain(raw: object) -> Domain:
    return to_domain(_validate(DomainPayload, raw))


def parse_competency(raw: object) -> Competency:
    return to_competency(_validate(CompetencyPayload, raw))


def parse_sub_competency(raw: object) -> SubCompetency:
    return to_sub_competency(_validate(SubCompetencyPayload, raw))


def parse_resource(raw: object) -> Resource:
    return to_resource(_validate(ResourcePayload, raw))


def parse_evaluation(raw: object) -> Evaluation:
    return to_evaluation(_validate(EvaluationPayload, raw))

