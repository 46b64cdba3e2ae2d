"""
Modelo de documento kubeconfig e seu codec YAML.

    - model → registros tipados (open record) e documentos imutáveis
    - codec → parse (texto → Document) e serialize (MergedDocument → texto)
"""

from .codec import parse, serialize, to_dict
from .model import (
    API_VERSION,
    KIND,
    Cluster,
    Context,
    Document,
    MergedDocument,
    NamedCluster,
    NamedContext,
    NamedEntity,
    NamedUser,
    User,
)

__all__ = [
    "parse",
    "serialize",
    "to_dict",
    "API_VERSION",
    "KIND",
    "Cluster",
    "Context",
    "Document",
    "MergedDocument",
    "NamedCluster",
    "NamedContext",
    "NamedEntity",
    "NamedUser",
    "User",
]
