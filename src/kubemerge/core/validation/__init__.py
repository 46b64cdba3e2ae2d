"""
Validator do kubemerge: integridade referencial entre contexts, clusters e users.
"""

from .validator import ReferenceWarning, validate

__all__ = ["ReferenceWarning", "validate"]
