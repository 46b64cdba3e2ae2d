# src/kubemerge/__init__.py
"""
kubemerge: consolida vários kubeconfigs parciais em um kubeconfig canônico.

API de domínio:
    - parse / serialize → `kubemerge.core.kubeconfig`
    - merge             → `kubemerge.core.merge`
    - validate          → `kubemerge.core.validation`

Execução completa (descobrir, parsear, mesclar, validar, gravar):
    - run_merge         → `kubemerge.runner`
    - CLI               → `kubemerge.cli` (comando `kubemerge`)
"""

from .core.exceptions import MergeError, ParseError, ValidationError
from .core.kubeconfig import Document, MergedDocument, parse, serialize
from .core.merge import merge, merge_with_report
from .core.validation import ReferenceWarning, validate

__version__ = "0.2.0"

__all__ = [
    "MergeError",
    "ParseError",
    "ValidationError",
    "Document",
    "MergedDocument",
    "parse",
    "serialize",
    "merge",
    "merge_with_report",
    "ReferenceWarning",
    "validate",
    "__version__",
]
