"""Top-down merge of a tree document into a live hierarchy.

Stages run strictly in sequence for one call:

1) domain: update ``name``/``colorCode`` when they differ
2) competencies, in document order
3) sub-competencies of each competency, in document order
4) resources then evaluations of each sub-competency, in document order

Parents are always persisted before their children so every child is created
under an id the store has already assigned. Nothing is rolled back on failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .codec import validate_document
from .context import ImportContext, ImportSummary, MergeContext
from .document import Document
from .reconcilers import LevelReconcilers, build_reconcilers

if TYPE_CHECKING:
    from currisync.domain.model import Domain, DomainUpdate
    from currisync.domain.ports import CurriculumStores, DomainStore

    from .document import CompetencyNode, DomainNode, SubCompetencyNode

log = getLogger(__name__)


async def merge_domain(
    node: DomainNode,
    current: Domain,
    *,
    store: DomainStore,
    summary: ImportSummary,
) -> None:
    """Update only the domain fields that differ; no store call otherwise."""

    changes: DomainUpdate = {}
    if node.name and node.name != current.name:
        changes["name"] = node.name
    if node.color_code_provided and node.color_code != current.color_code:
        changes["color_code"] = node.color_code
    if not changes:
        return

    await store.update(current.id, changes)
    summary.domain_updated = True
    log.debug("Updated domain %s fields: %s", current.id, ", ".join(sorted(changes)))


async def merge_sub_competency(
    node: SubCompetencyNode,
    *,
    competency_id: str,
    merge: MergeContext,
    reconcilers: LevelReconcilers,
) -> None:
    sub = await reconcilers.sub_competencies.reconcile(
        node,
        parent_id=competency_id,
        index=merge.sub_competencies.scope(competency_id),
        summary=merge.summary,
    )
    if sub is None:
        return

    resources = merge.resources.scope(sub.id)
    for resource_node in node.resources:
        await reconcilers.resources.reconcile(
            resource_node, parent_id=sub.id, index=resources, summary=merge.summary
        )

    evaluations = merge.evaluations.scope(sub.id)
    for evaluation_node in node.evaluations:
        await reconcilers.evaluations.reconcile(
            evaluation_node, parent_id=sub.id, index=evaluations, summary=merge.summary
        )


async def merge_competency(
    node: CompetencyNode,
    *,
    merge: MergeContext,
    reconcilers: LevelReconcilers,
) -> None:
    competency = await reconcilers.competencies.reconcile(
        node,
        parent_id=merge.domain_id,
        index=merge.competencies,
        summary=merge.summary,
    )
    if competency is None:
        return

    for sub_node in node.sub_competencies:
        await merge_sub_competency(
            sub_node, competency_id=competency.id, merge=merge, reconcilers=reconcilers
        )


@dataclass
class DomainImporter:
    """Merge documents into live hierarchies through the given stores.

    ``importing`` is ``True`` while a call is in flight. It lets callers refuse
    duplicate submissions; it is not a lock.
    """

    stores: CurriculumStores
    importing: bool = field(default=False, init=False)
    _reconcilers: LevelReconcilers = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._reconcilers = build_reconcilers(self.stores)

    async def import_document(self, document: Document, context: ImportContext) -> ImportSummary:
        """Merge ``document`` into ``context.current_domain`` and summarise the writes."""

        self.importing = True
        try:
            return await self._run(document, context)
        finally:
            self.importing = False

    async def _run(self, document: Document, context: ImportContext) -> ImportSummary:
        domain = context.current_domain
        log.info(
            "Starting import into domain %s: competencies=%s",
            domain.id,
            len(document.competencies),
        )
        if document.domain.id is not None and document.domain.id != domain.id:
            log.info("Document was exported from domain %s", document.domain.id)

        merge = MergeContext.from_import_context(context)
        await merge_domain(
            document.domain, domain, store=self.stores.domains, summary=merge.summary
        )
        for competency_node in document.competencies:
            await merge_competency(competency_node, merge=merge, reconcilers=self._reconcilers)

        log.info("Finished import into domain %s: writes=%s", domain.id, merge.summary.total_writes)
        return merge.summary


async def import_document(
    document: Document | Mapping[str, object],
    context: ImportContext,
    *,
    stores: CurriculumStores,
) -> ImportSummary:
    """Validate (if needed) and merge ``document`` in one call.

    Raises :class:`~currisync.domain.tree_io.errors.InvalidDocumentShapeError`
    before any store call when a decoded mapping lacks the minimal shape.
    """

    if not isinstance(document, Document):
        document = validate_document(document).unwrap()
    return await DomainImporter(stores).import_document(document, context)
