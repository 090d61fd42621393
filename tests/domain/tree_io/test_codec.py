from __future__ import annotations

import json

import pytest

from currisync.domain.model import (
    Competency,
    Domain,
    Evaluation,
    EvaluationFormat,
    EvaluationMode,
    Resource,
    ResourceType,
    SubCompetency,
)
from currisync.domain.tree_io import (
    Document,
    InvalidDocumentShapeError,
    MalformedDocumentError,
    export_document,
    parse_document,
    render_document,
    validate_document,
)


def _chemistry_domain() -> Domain:
    evaluation = Evaluation(
        id="eval-1",
        sub_competency_id="sub-1",
        name="Lab project",
        mode=EvaluationMode.SOLO,
        format=EvaluationFormat.EXPERIMENT,
    )
    resource = Resource(
        id="res-1",
        sub_competency_id="sub-1",
        type=ResourceType.LINK,
        name="Reference",
        url="https://example.com",
    )
    sub = SubCompetency(
        id="sub-1",
        competency_id="comp-1",
        name="Chemistry basics",
        resources=[resource],
        evaluations=[evaluation],
    )
    competency = Competency(
        id="comp-1", domain_id="dom-1", name="Chemistry", sub_competencies=[sub]
    )
    return Domain(id="dom-1", name="Science", color_code="#00AAFF", competencies=[competency])


def test_export_spells_out_every_optional_field_as_null() -> None:
    payload = export_document(_chemistry_domain()).to_payload()

    assert payload == {
        "domain": {"id": "dom-1", "name": "Science", "colorCode": "#00AAFF"},
        "competencies": [
            {
                "id": "comp-1",
                "name": "Chemistry",
                "description": None,
                "objectives": None,
                "subCompetencies": [
                    {
                        "id": "sub-1",
                        "name": "Chemistry basics",
                        "description": None,
                        "objectives": None,
                        "level": 0,
                        "resources": [
                            {
                                "id": "res-1",
                                "type": "Link",
                                "name": "Reference",
                                "description": None,
                                "url": "https://example.com",
                                "fileKey": None,
                                "personUserId": None,
                            }
                        ],
                        "evaluations": [
                            {
                                "id": "eval-1",
                                "name": "Lab project",
                                "description": None,
                                "mode": "Solo",
                                "format": "Experiment",
                                "durationMin": None,
                                "url": None,
                                "fileKey": None,
                            }
                        ],
                    }
                ],
            }
        ],
    }


def test_render_uses_two_space_indentation() -> None:
    rendered = render_document(_chemistry_domain())

    assert rendered.startswith('{\n  "domain": {\n    "id": "dom-1",')
    assert json.loads(rendered) == export_document(_chemistry_domain()).to_payload()


def test_round_trip_reproduces_export(live_domain: Domain) -> None:
    exported = export_document(live_domain)

    assert parse_document(render_document(live_domain)) == exported


def test_parse_accepts_minimal_document() -> None:
    raw = json.dumps(
        {
            "domain": {"id": "dom-1", "name": "STEM Domain", "colorCode": "#123456"},
            "competencies": [],
        }
    )

    document = parse_document(raw)

    assert document.domain.id == "dom-1"
    assert document.domain.name == "STEM Domain"
    assert document.domain.color_code == "#123456"
    assert document.competencies == []


def test_parse_accepts_bytes() -> None:
    document = parse_document(b'{"domain": {"name": "X"}, "competencies": []}')

    assert document.domain.name == "X"


@pytest.mark.parametrize("raw", ["not-json", "", "{", b"\xff\xfe"])
def test_parse_rejects_malformed_text(raw: str | bytes) -> None:
    with pytest.raises(MalformedDocumentError, match=r"^Unable to parse JSON file\.$"):
        parse_document(raw)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ([], "Invalid import file: expected an object."),
        ("text", "Invalid import file: expected an object."),
        ({"competencies": []}, "Invalid import file: missing domain definition."),
        (
            {"domain": "Science", "competencies": []},
            "Invalid import file: missing domain definition.",
        ),
        ({"domain": {}, "competencies": []}, "Invalid import file: domain.name must be a string."),
        (
            {"domain": {"name": 42}, "competencies": []},
            "Invalid import file: domain.name must be a string.",
        ),
        ({"domain": {"name": "Science"}}, "Invalid import file: competencies must be an array."),
        (
            {"domain": {"name": "Science"}, "competencies": {}},
            "Invalid import file: competencies must be an array.",
        ),
    ],
)
def test_parse_rejects_invalid_shape(payload: object, message: str) -> None:
    with pytest.raises(InvalidDocumentShapeError) as excinfo:
        parse_document(json.dumps(payload))

    assert str(excinfo.value) == message


def test_validate_document_reports_reason_without_raising() -> None:
    validation = validate_document({"domain": {"name": "Science"}})

    assert not validation.ok
    assert validation.document is None
    assert validation.reason == "Invalid import file: competencies must be an array."


def test_validation_is_lenient_below_the_domain() -> None:
    validation = validate_document(
        {
            "domain": {"name": "Science", "colorCode": 7},
            "competencies": [
                "not an object",
                {
                    "id": "",
                    "name": ["Bio"],
                    "subCompetencies": [{"name": "Cells", "level": "high", "resources": None}],
                },
            ],
        }
    )

    document = validation.unwrap()
    assert isinstance(document, Document)
    assert document.domain.color_code is None
    assert document.competencies[0].name is None
    bio = document.competencies[1]
    assert bio.id is None
    assert bio.name is None
    assert bio.sub_competencies[0].level is None
    assert bio.sub_competencies[0].resources == []


def test_numeric_names_are_kept_and_fractional_counts_dropped() -> None:
    document = parse_document(
        json.dumps(
            {
                "domain": {"name": "Science"},
                "competencies": [
                    {"name": 101, "subCompetencies": [{"name": 2.0, "level": 1.5}]},
                    {"name": 0},
                ],
            }
        )
    )

    first, zero = document.competencies
    assert first.name == "101"
    assert first.sub_competencies[0].name == "2"
    assert first.sub_competencies[0].level is None
    assert zero.name is None


def test_color_code_presence_is_tracked() -> None:
    absent = parse_document('{"domain": {"name": "A"}, "competencies": []}')
    explicit_null = parse_document(
        '{"domain": {"name": "A", "colorCode": null}, "competencies": []}'
    )

    assert not absent.domain.color_code_provided
    assert explicit_null.domain.color_code_provided
    assert explicit_null.domain.color_code is None


def test_numeric_ids_are_read_as_strings() -> None:
    document = parse_document('{"domain": {"id": 5, "name": "A"}, "competencies": [{"id": 9}]}')

    assert document.domain.id == "5"
    assert document.competencies[0].id == "9"
