"""
Merge Engine do kubemerge: fold de documentos kubeconfig em ordem de precedência.
"""

from .merger import (
    CATEGORIES,
    MergeReport,
    SkippedDuplicate,
    merge,
    merge_with_report,
)

__all__ = [
    "CATEGORIES",
    "MergeReport",
    "SkippedDuplicate",
    "merge",
    "merge_with_report",
]
