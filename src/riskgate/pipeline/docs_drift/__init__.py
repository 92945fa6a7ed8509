"""Documentation drift detection."""

from riskgate.pipeline.docs_drift.detector import (
    DRIFT_WARNING,
    DocsDriftResult,
    Strictness,
    check_docs_drift,
    is_doc_file,
)

__all__ = ["DRIFT_WARNING", "DocsDriftResult", "Strictness", "check_docs_drift", "is_doc_file"]
