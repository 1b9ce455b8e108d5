"""Export pipeline services.

    ExportCoordinator     - drives parent/child paging under a global quota
    QuotaTracker          - per-call child-record budget
    ExportWriter          - persists the aggregated payload as JSON
    DocumentProjector     - child record → labelled text document
    EmbeddingBatcher      - fixed-size embedding calls
    VectorizationService  - batch → embed → upsert, sequentially
    JiraBrowser           - project listing and JQL preview, outside the quota
"""

from atlas_export.services.document_projector import DocumentProjector
from atlas_export.services.embedding_batcher import EmbeddingBatcher
from atlas_export.services.export_coordinator import ExportCoordinator
from atlas_export.services.export_writer import ExportWriter
from atlas_export.services.jira_browser import JiraBrowser
from atlas_export.services.quota_tracker import QuotaTracker
from atlas_export.services.vectorization_service import VectorizationService

__all__ = [
    "DocumentProjector",
    "EmbeddingBatcher",
    "ExportCoordinator",
    "ExportWriter",
    "JiraBrowser",
    "QuotaTracker",
    "VectorizationService",
]
