"""External review agent status."""

from riskgate.pipeline.review.status import (
    DEFAULT_CHECK_NAME,
    REVIEW_REQUIRED_TIER,
    ReviewStatus,
    fetch_check_runs,
    resolve_review_status,
)

__all__ = [
    "DEFAULT_CHECK_NAME",
    "REVIEW_REQUIRED_TIER",
    "ReviewStatus",
    "fetch_check_runs",
    "resolve_review_status",
]
