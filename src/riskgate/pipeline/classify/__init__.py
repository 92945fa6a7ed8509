"""Changed-file risk classification."""

from riskgate.pipeline.classify.classifier import (
    ChangedFiles,
    classify_changes,
    classify_file,
    classify_paths,
    collect_changed_files,
)
from riskgate.pipeline.classify.types import ClassificationResult

__all__ = [
    "ChangedFiles",
    "ClassificationResult",
    "classify_changes",
    "classify_file",
    "classify_paths",
    "collect_changed_files",
]
