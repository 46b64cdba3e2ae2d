# src/kubemerge/core/kubeconfig/model.py
"""
Modelo tipado de documentos kubeconfig.

Este módulo define a representação em memória de um kubeconfig:
registros nomeados de cluster, context e user, a seleção `current-context`
e o mapa livre de `preferences`.

Cada registro segue o padrão *open record*: os campos conhecidos são
atributos tipados e todo campo não reconhecido é guardado, sem alteração,
no mapa opaco `extra` do próprio registro. O codec reemite `extra` no mesmo
nível de aninhamento, o que garante compatibilidade com campos do schema
que o kubemerge não conhece (ex.: `extensions`, `exec`, `proxy-url`).

Tipos definidos:
    - Cluster, Context, User → payloads dos registros
    - NamedEntity[T]          → par (name, payload) + extra do wrapper
    - Document                → um kubeconfig de entrada já parseado
    - MergedDocument          → resultado do fold de vários Documents

Invariantes:
    - Todas as estruturas são imutáveis (frozen) após a construção
    - Sequências de registros são tuplas (ordem de declaração preservada)
    - `current_context == ""` significa "não definido"
    - `MergedDocument.api_version`/`kind` têm sempre os valores canônicos

Limites explícitos:
    - Não faz parse nem serialização (ver `codec`)
    - Não resolve referências por nome (ver `kubemerge.core.validation`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar


API_VERSION = "v1"
KIND = "Config"

T = TypeVar("T")


@dataclass(frozen=True)
class Cluster:
    """Endpoint de um cluster e material de autoridade certificadora."""

    server: str
    certificate_authority_data: Optional[str] = None
    certificate_authority: Optional[str] = None
    insecure_skip_tls_verify: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Context:
    """Associação por nome entre um cluster e um user (+ namespace opcional)."""

    cluster: str
    user: str
    namespace: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class User:
    """
    Credenciais de acesso.

    Nenhum campo é obrigatório: um user sem credenciais é sintaticamente
    válido (ex.: autenticação via plugin `exec`, que fica em `extra`).
    """

    client_certificate_data: Optional[str] = None
    client_key_data: Optional[str] = None
    client_certificate: Optional[str] = None
    client_key: Optional[str] = None
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NamedEntity(Generic[T]):
    """
    Registro nomeado de uma categoria (clusters, contexts ou users).

    `name` é a chave de identidade dentro da categoria em todo o documento
    mesclado. `extra` guarda campos desconhecidos irmãos de `name`.
    """

    name: str
    payload: T
    extra: Dict[str, Any] = field(default_factory=dict)


NamedCluster = NamedEntity[Cluster]
NamedContext = NamedEntity[Context]
NamedUser = NamedEntity[User]


@dataclass(frozen=True)
class Document:
    """
    Um kubeconfig de entrada já parseado.

    `source` é o identificador de proveniência (tipicamente o caminho do
    arquivo) e não participa da serialização.
    """

    clusters: Optional[Tuple[NamedCluster, ...]] = None
    contexts: Optional[Tuple[NamedContext, ...]] = None
    users: Optional[Tuple[NamedUser, ...]] = None
    current_context: str = ""
    preferences: Dict[str, Any] = field(default_factory=dict)
    api_version: Optional[str] = None
    kind: Optional[str] = None
    source: Optional[str] = None

    def is_blank(self) -> bool:
        """True quando o documento não declara entidade, current-context nem preferência."""
        return not (
            self.clusters
            or self.contexts
            or self.users
            or self.current_context
            or self.preferences
        )


@dataclass(frozen=True)
class MergedDocument:
    """
    Kubeconfig canônico produzido pelo merge.

    Coleções vazias são representadas como `None` (ausentes), espelhando a
    regra de serialização que omite coleções vazias.
    """

    clusters: Optional[Tuple[NamedCluster, ...]] = None
    contexts: Optional[Tuple[NamedContext, ...]] = None
    users: Optional[Tuple[NamedUser, ...]] = None
    current_context: str = ""
    preferences: Dict[str, Any] = field(default_factory=dict)
    api_version: str = API_VERSION
    kind: str = KIND

    def cluster_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.clusters or ())

    def context_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.contexts or ())

    def user_names(self) -> Tuple[str, ...]:
        return tuple(u.name for u in self.users or ())

    @classmethod
    def from_document(cls, document: Document) -> "MergedDocument":
        """Promove um Document isolado a MergedDocument (metadados canônicos)."""
        return cls(
            clusters=document.clusters or None,
            contexts=document.contexts or None,
            users=document.users or None,
            current_context=document.current_context,
            preferences=dict(document.preferences),
        )
