"""Export and re-import of a domain's curriculum tree as a JSON document."""

from __future__ import annotations

from .codec import (
    DocumentValidation,
    export_document,
    parse_document,
    render_document,
    validate_document,
)
from .context import ImportContext, ImportSummary, LevelCounts, MergeContext
from .document import (
    CompetencyNode,
    Document,
    DomainNode,
    EvaluationNode,
    ResourceNode,
    SubCompetencyNode,
)
from .errors import (
    DocumentError,
    InvalidDocumentShapeError,
    InvalidNodeValueError,
    MalformedDocumentError,
)
from .orchestrator import DomainImporter, import_document

__all__ = [
    "CompetencyNode",
    "Document",
    "DocumentError",
    "DocumentValidation",
    "DomainImporter",
    "DomainNode",
    "EvaluationNode",
    "ImportContext",
    "ImportSummary",
    "InvalidDocumentShapeError",
    "InvalidNodeValueError",
    "LevelCounts",
    "MalformedDocumentError",
    "MergeContext",
    "ResourceNode",
    "SubCompetencyNode",
    "export_document",
    "import_document",
    "parse_document",
    "render_document",
    "validate_document",
]
