"""Quota-bounded two-level export orchestrator.

Drives one :class:`ISourceApiClient` through every parent and, for each
parent, through its child pages until the global quota is spent or the
source runs dry.  The aggregated payload is always written before the
optional vectorization stage starts.

Phases (logged as ``export_phase``)::

    INIT → FETCH_PARENTS → FETCH_CHILDREN → ACCUMULATE
         → (next child page / next parent / next parent page)
         → FINALIZE → [VECTORIZE] → DONE

Any unrecovered error moves the call to FAILED and propagates unchanged.

Export atomicity
----------------
The file is written only at FINALIZE, so a source failure part-way through
leaves nothing on disk.  A vectorization failure happens after the write:
the typed error is re-raised with ``export_file`` set to the persisted path.

All per-call state (quota, accumulation buffer, phase) lives in local
variables of :meth:`ExportCoordinator.run`, so one coordinator can serve
concurrent export calls.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.interfaces.source_api import ISourceApiClient
from atlas_export.models.export import (
    ExportPayload,
    ExportPhase,
    ExportRequest,
    ExportSummary,
    ParentGroup,
    VectorizationSummary,
)
from atlas_export.models.pagination import OffsetCursor, Page
from atlas_export.models.records import ChildRecord, Credential, ParentRecord
from atlas_export.providers.credentials.request_credential_provider import credentials_for
from atlas_export.services.document_projector import DocumentProjector
from atlas_export.services.export_writer import ExportWriter
from atlas_export.services.quota_tracker import QuotaTracker
from atlas_export.services.vectorization_service import VectorizationService
from atlas_export.utils.errors import AtlasExportError, ConfigurationError
from atlas_export.utils.logging import get_logger


class _PhaseLog:
    """Tracks and logs the current phase of one export call."""

    def __init__(self, logger) -> None:
        self._logger = logger
        self.current = ExportPhase.INIT

    def enter(self, phase: ExportPhase, **context) -> None:
        self.current = phase
        self._logger.debug("export_phase", phase=phase.value, **context)


class ExportCoordinator:
    """Runs quota-bounded exports for one source system.

    Parameters
    ----------
    source_client:
        Page fetcher for the source's parents and children.
    credential_provider:
        Resolves the configured source credential once per call.  Request
        fields (``base_url``, ``email``, ``api_key``) override it per call.
    writer:
        Persists the final payload.
    projector:
        Maps child records to documents for vectorization.
    vectorizer:
        Embed-and-upsert stage; ``None`` when vectorization is not configured.
    """

    def __init__(
        self,
        source_client: ISourceApiClient,
        credential_provider: ICredentialProvider,
        writer: ExportWriter,
        projector: DocumentProjector,
        vectorizer: VectorizationService | None = None,
    ) -> None:
        self._source = source_client
        self._credentials = credential_provider
        self._writer = writer
        self._projector = projector
        self._vectorizer = vectorizer
        self._source_name = source_client.get_source_name()

    @property
    def source_name(self) -> str:
        return self._source_name

    @property
    def vectorization_enabled(self) -> bool:
        return self._vectorizer is not None

    async def run(self, request: ExportRequest) -> ExportSummary:
        """Execute one export call.

        Raises
        ------
        ConfigurationError
            Credentials are incomplete, or vectorization was requested but
            no vectorizer is configured.  Raised before any network call.
        AtlasExportError
            Any upstream failure.  When it comes from the vectorization
            stage, ``export_file`` names the already-written file.
        """
        logger = get_logger(__name__).bind(
            export_id=uuid.uuid4().hex[:12], source=self._source_name
        )
        phase = _PhaseLog(logger)
        logger.info(
            "export_started",
            limit=request.limit,
            child_batch_size=request.child_batch_size,
            parent_batch_size=request.parent_batch_size,
            vectorize=request.vectorize,
        )

        try:
            if request.vectorize and self._vectorizer is None:
                raise ConfigurationError(
                    "Vectorization requested but OPENAI_API_KEY, PINECONE_API_KEY "
                    "and PINECONE_BASE_URL are not all set",
                    provider_name=self._source_name,
                )

            credential = await credentials_for(request, self._credentials).get_credentials()
            quota = QuotaTracker(request.limit)
            groups = await self._collect(credential, request, quota, phase, logger)

            phase.enter(ExportPhase.FINALIZE)
            child_count = sum(len(group.children) for group in groups)
            payload = ExportPayload(
                source=self._source_name,
                parent_count=len(groups),
                child_count=child_count,
                limit=request.limit,
                truncated=quota.truncated,
                parents=groups,
            )
            export_file = self._writer.write(payload)

            vectorization = None
            if request.vectorize and self._vectorizer is not None:
                phase.enter(ExportPhase.VECTORIZE, documents=child_count)
                vectorization = await self._vectorize(
                    groups, self._vectorizer, request.namespace, export_file
                )
        except AtlasExportError as exc:
            failed_in = phase.current
            phase.enter(ExportPhase.FAILED)
            logger.error(
                "export_failed",
                phase=failed_in.value,
                kind=exc.kind.value,
                error=str(exc),
                export_file=str(exc.export_file) if exc.export_file else None,
            )
            raise

        phase.enter(ExportPhase.DONE)
        summary = ExportSummary(
            source=self._source_name,
            parent_count=payload.parent_count,
            child_count=payload.child_count,
            limit=request.limit,
            truncated=payload.truncated,
            file=str(export_file),
            vectorization=vectorization,
        )
        logger.info(
            "export_completed",
            parent_count=summary.parent_count,
            child_count=summary.child_count,
            truncated=summary.truncated,
            file=summary.file,
            vector_count=vectorization.vector_count if vectorization else None,
        )
        return summary

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    async def _collect(
        self,
        credential: Credential,
        request: ExportRequest,
        quota: QuotaTracker,
        phase: _PhaseLog,
        logger,
    ) -> list[ParentGroup]:
        groups: list[ParentGroup] = []
        cursor: OffsetCursor | None = OffsetCursor(start=0, size=request.parent_batch_size)

        while cursor is not None:
            phase.enter(ExportPhase.FETCH_PARENTS, start=cursor.start)
            page: Page[ParentRecord] = await self._source.fetch_parents(credential, cursor)
            logger.info(
                "parent_page_fetched",
                start=cursor.start,
                returned=len(page.items),
                has_next=page.has_more,
            )

            for parent in page.items:
                if not parent.key:
                    logger.warning("parent_skipped_missing_key", parent_id=parent.id)
                    continue
                if quota.exhausted:
                    quota.mark_truncated()
                    logger.info("quota_exhausted", skipped_parent=parent.key)
                    return groups

                children = await self._collect_children(
                    credential, parent, request, quota, phase, logger
                )
                groups.append(ParentGroup(parent=parent, children=children))

            if quota.exhausted and page.has_more:
                quota.mark_truncated()
                logger.info("quota_exhausted", reason="parent pages remain")
                return groups
            cursor = page.next if isinstance(page.next, OffsetCursor) else None

        return groups

    async def _collect_children(
        self,
        credential: Credential,
        parent: ParentRecord,
        request: ExportRequest,
        quota: QuotaTracker,
        phase: _PhaseLog,
        logger,
    ) -> list[ChildRecord]:
        children: list[ChildRecord] = []
        cursor = self._source.initial_child_cursor(request.child_batch_size)

        while True:
            max_results = quota.page_size(request.child_batch_size)
            phase.enter(ExportPhase.FETCH_CHILDREN, parent=parent.key)
            page = await self._source.fetch_children(
                credential, parent.key, cursor, max_results
            )

            phase.enter(ExportPhase.ACCUMULATE, parent=parent.key)
            accepted = quota.consume(len(page.items))
            children.extend(page.items[:accepted])
            dropped = len(page.items) - accepted
            logger.info(
                "child_page_fetched",
                parent=parent.key,
                requested=max_results,
                returned=len(page.items),
                accepted=accepted,
                remaining=quota.remaining,
            )

            if quota.exhausted:
                more_reported = page.total is not None and page.total > len(children)
                if dropped or page.has_more or more_reported:
                    quota.mark_truncated()
                    logger.info(
                        "quota_exhausted",
                        parent=parent.key,
                        collected=len(children),
                        reported_total=page.total,
                    )
                break
            if page.next is None:
                break
            cursor = page.next

        return children

    # ------------------------------------------------------------------
    # Vectorization
    # ------------------------------------------------------------------

    async def _vectorize(
        self,
        groups: list[ParentGroup],
        vectorizer: VectorizationService,
        namespace: str | None,
        export_file: Path,
    ) -> VectorizationSummary:
        documents = self._projector.project_all(groups)
        if not documents:
            return VectorizationSummary(
                namespace=vectorizer.resolve_namespace(namespace), vector_count=0
            )
        try:
            return await vectorizer.embed_and_upsert(documents, namespace)
        except AtlasExportError as exc:
            exc.attach_export_file(export_file)
            raise
