"""Conversion between live hierarchies and portable tree documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

from pydantic import ValidationError

from .document import (
    CompetencyNode,
    Document,
    DomainNode,
    EvaluationNode,
    ResourceNode,
    SubCompetencyNode,
)
from .errors import InvalidDocumentShapeError, MalformedDocumentError

if TYPE_CHECKING:
    from currisync.domain.model import (
        Competency,
        Domain,
        Evaluation,
        Resource,
        SubCompetency,
    )

log = getLogger(__name__)

JSON_INDENT_SPACES: Final[int] = 2

MALFORMED_MESSAGE: Final[str] = "Unable to parse JSON file."
NOT_AN_OBJECT_MESSAGE: Final[str] = "Invalid import file: expected an object."
MISSING_DOMAIN_MESSAGE: Final[str] = "Invalid import file: missing domain definition."
DOMAIN_NAME_MESSAGE: Final[str] = "Invalid import file: domain.name must be a string."
COMPETENCIES_MESSAGE: Final[str] = "Invalid import file: competencies must be an array."


# Export ----------------------------------------------------------------------


def _export_resource(resource: Resource) -> ResourceNode:
    return ResourceNode(
        id=resource.id,
        type=resource.type.value,
        name=resource.name,
        description=resource.description,
        url=resource.url,
        file_key=resource.file_key,
        person_user_id=resource.person_user_id,
    )


def _export_evaluation(evaluation: Evaluation) -> EvaluationNode:
    return EvaluationNode(
        id=evaluation.id,
        name=evaluation.name,
        description=evaluation.description,
        mode=evaluation.mode.value,
        format=evaluation.format.value,
        duration_min=evaluation.duration_min,
        url=evaluation.url,
        file_key=evaluation.file_key,
    )


def _export_sub_competency(sub: SubCompetency) -> SubCompetencyNode:
    return SubCompetencyNode(
        id=sub.id,
        name=sub.name,
        description=sub.description,
        objectives=sub.objectives,
        level=sub.level,
        resources=[_export_resource(resource) for resource in sub.resources],
        evaluations=[_export_evaluation(evaluation) for evaluation in sub.evaluations],
    )


def _export_competency(competency: Competency) -> CompetencyNode:
    return CompetencyNode(
        id=competency.id,
        name=competency.name,
        description=competency.description,
        objectives=competency.objectives,
        sub_competencies=[_export_sub_competency(sub) for sub in competency.sub_competencies],
    )


def export_document(domain: Domain) -> Document:
    """Snapshot ``domain`` and its whole tree as a document.

    Optional live fields that are unset are carried as ``None`` so the rendered
    JSON always spells out every key.
    """

    return Document(
        domain=DomainNode(id=domain.id, name=domain.name, color_code=domain.color_code),
        competencies=[_export_competency(competency) for competency in domain.competencies],
    )


def render_document(domain: Domain) -> str:
    """Return the pretty-printed JSON export of ``domain``."""

    return export_document(domain).model_dump_json(by_alias=True, indent=JSON_INDENT_SPACES)


# Import ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocumentValidation:
    """Tagged outcome of a structural document check."""

    document: Document | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None

    def unwrap(self) -> Document:
        """Return the document or raise :class:`InvalidDocumentShapeError`."""
        if self.document is None:
            raise InvalidDocumentShapeError(self.reason or NOT_AN_OBJECT_MESSAGE)
        return self.document


def validate_document(payload: object) -> DocumentValidation:
    """Check the minimal document shape without raising.

    Only the domain object, its ``name`` and the ``competencies`` sequence are
    checked here; everything deeper is left to the reconcilers.
    """

    if not isinstance(payload, Mapping):
        return DocumentValidation(reason=NOT_AN_OBJECT_MESSAGE)
    mapping = cast(Mapping[str, object], payload)

    domain = mapping.get("domain")
    if not isinstance(domain, Mapping):
        return DocumentValidation(reason=MISSING_DOMAIN_MESSAGE)
    if not isinstance(cast(Mapping[str, object], domain).get("name"), str):
        return DocumentValidation(reason=DOMAIN_NAME_MESSAGE)
    if not isinstance(mapping.get("competencies"), list):
        return DocumentValidation(reason=COMPETENCIES_MESSAGE)

    try:
        document = Document.model_validate(mapping)
    except ValidationError as exc:
        reason = f"Invalid import file: {exc.error_count()} invalid value(s)."
        return DocumentValidation(reason=reason)
    return DocumentValidation(document=document)


def parse_document(raw: str | bytes) -> Document:
    """Decode raw JSON text into a :class:`Document`.

    Raises :class:`MalformedDocumentError` when the text is not JSON and
    :class:`InvalidDocumentShapeError` when the minimal shape is missing.
    """

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(MALFORMED_MESSAGE) from exc

    validation = validate_document(payload)
    if not validation.ok:
        log.debug("Rejected import document: %s", validation.reason)
    return validation.unwrap()
