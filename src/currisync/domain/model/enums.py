"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Discriminator for the five curriculum entity kinds."""

    DOMAIN = "domain"
    COMPETENCY = "competency"
    SUB_COMPETENCY = "sub_competency"
    RESOURCE = "resource"
    EVALUATION = "evaluation"


class ResourceType(StrEnum):
    LINK = "Link"
    HUMAN = "Human"
    DOCUMENT = "Document"
    LOCATION = "Location"


class EvaluationMode(StrEnum):
    SOLO = "Solo"
    PEER = "Peer"
    ADULT = "Adult"


class EvaluationFormat(StrEnum):
    EXPERIMENT = "Experiment"
    PAPER_PENCIL = "PaperPencil"
    ORAL = "Oral"
    DIGITAL = "Digital"
