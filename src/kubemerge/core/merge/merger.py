# src/kubemerge/core/merge/merger.py
"""
Merge de documentos kubeconfig.

Este módulo implementa o fold de uma sequência ordenada de `Document` em um
único `MergedDocument`.

Política de merge (v1):
    - A ordem da sequência recebida É a ordem de precedência
    - clusters / contexts / users → deduplicação por nome, primeira
      ocorrência vence; documentos posteriores só adicionam nomes novos
      (vale também para nomes repetidos dentro do mesmo documento)
    - current-context → o primeiro valor não vazio vence
    - preferences → sobrescrita chave a chave, o ÚLTIMO documento vence
    - documentos em branco são ignorados silenciosamente

A política de `preferences` tem direção oposta à das entidades. A assimetria
é compatível com o comportamento histórico do kubemerge e está registrada
como questão em aberto no DESIGN.md; não unificar sem decisão explícita.

Invariantes:
    - Nomes são únicos por categoria no documento resultante
    - A ordem de inserção dos registros sobreviventes é preservada
    - Campos opacos (`extra`) do registro sobrevivente são mantidos intactos
    - Nenhum input é mutado; a função não realiza I/O
    - A mesma sequência de entrada sempre produz o mesmo resultado

Limites explícitos:
    - Não reconcilia definições conflitantes (mesmo nome, conteúdo diferente)
    - Não valida referências (ver `kubemerge.core.validation`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from kubemerge.core.exceptions import MergeError
from kubemerge.core.kubeconfig.model import Document, MergedDocument, NamedEntity


CATEGORIES: Tuple[str, ...] = ("clusters", "contexts", "users")


@dataclass(frozen=True)
class SkippedDuplicate:
    """Ocorrência descartada porque o nome já havia sido registrado."""

    category: str
    name: str
    source: Optional[str]
    kept_from: Optional[str]


@dataclass(frozen=True)
class MergeReport:
    """
    Auditoria do fold: o que entrou, o que foi descartado e de onde veio.

    Campos:
        - documents_total: documentos recebidos
        - documents_blank: documentos em branco ignorados
        - added: (category, name, source) na ordem de inserção
        - skipped: duplicatas descartadas
        - current_context_source: proveniência do current-context escolhido
        - preference_sources: chave → proveniência do valor final
    """

    documents_total: int
    documents_blank: int
    added: Tuple[Tuple[str, str, Optional[str]], ...] = ()
    skipped: Tuple[SkippedDuplicate, ...] = ()
    current_context_source: Optional[str] = None
    preference_sources: Dict[str, Optional[str]] = field(default_factory=dict)

    def added_by_source(self) -> Dict[Optional[str], int]:
        counts: Dict[Optional[str], int] = {}
        for _, _, source in self.added:
            counts[source] = counts.get(source, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documents_total": self.documents_total,
            "documents_blank": self.documents_blank,
            "added": [
                {"category": c, "name": n, "source": s} for c, n, s in self.added
            ],
            "skipped": [
                {
                    "category": d.category,
                    "name": d.name,
                    "source": d.source,
                    "kept_from": d.kept_from,
                }
                for d in self.skipped
            ],
            "current_context_source": self.current_context_source,
            "preference_sources": dict(self.preference_sources),
        }


class _Accumulator:
    """Estado mutável do fold; pertence exclusivamente a uma chamada de merge."""

    def __init__(self) -> None:
        self.entities: Dict[str, Dict[str, NamedEntity]] = {c: {} for c in CATEGORIES}
        self.origin: Dict[str, Dict[str, Optional[str]]] = {c: {} for c in CATEGORIES}
        self.current_context = ""
        self.current_context_source: Optional[str] = None
        self.preferences: Dict[str, Any] = {}
        self.preference_sources: Dict[str, Optional[str]] = {}
        self.added: List[Tuple[str, str, Optional[str]]] = []
        self.skipped: List[SkippedDuplicate] = []
        self.blank = 0

    def fold(self, document: Document) -> None:
        if document.is_blank():
            self.blank += 1
            return

        source = document.source
        for category in CATEGORIES:
            bucket = self.entities[category]
            for entity in getattr(document, category) or ():
                if entity.name in bucket:
                    self.skipped.append(
                        SkippedDuplicate(
                            category=category,
                            name=entity.name,
                            source=source,
                            kept_from=self.origin[category][entity.name],
                        )
                    )
                    continue
                bucket[entity.name] = entity
                self.origin[category][entity.name] = source
                self.added.append((category, entity.name, source))

        if not self.current_context and document.current_context:
            self.current_context = document.current_context
            self.current_context_source = source

        for key, value in document.preferences.items():
            self.preferences[key] = value
            self.preference_sources[key] = source

    def contributed(self) -> bool:
        return bool(self.added or self.current_context or self.preferences)

    def freeze(self) -> MergedDocument:
        def _collection(category: str) -> Optional[Tuple[NamedEntity, ...]]:
            values = tuple(self.entities[category].values())
            return values or None

        return MergedDocument(
            clusters=_collection("clusters"),
            contexts=_collection("contexts"),
            users=_collection("users"),
            current_context=self.current_context,
            preferences=dict(self.preferences),
        )


def merge_with_report(documents: Iterable[Document]) -> Tuple[MergedDocument, MergeReport]:
    """
    Executa o fold e devolve também a auditoria das decisões tomadas.

    Args:
        documents: Documentos em ordem de precedência.

    Returns:
        Tuple[MergedDocument, MergeReport]

    Raises:
        MergeError: Se nenhum documento contribuiu com entidade,
            current-context ou chave de preferência.
    """
    acc = _Accumulator()
    total = 0
    for document in documents:
        total += 1
        acc.fold(document)

    if not acc.contributed():
        raise MergeError(
            message="Nenhum kubeconfig válido contribuiu com conteúdo para o merge",
            details={"documents_total": total, "documents_blank": acc.blank},
            hint="Verifique o diretório de entrada e os padrões de exclusão.",
        )

    report = MergeReport(
        documents_total=total,
        documents_blank=acc.blank,
        added=tuple(acc.added),
        skipped=tuple(acc.skipped),
        current_context_source=acc.current_context_source,
        preference_sources=dict(acc.preference_sources),
    )
    return acc.freeze(), report


def merge(documents: Sequence[Document]) -> MergedDocument:
    """
    Mescla documentos kubeconfig em ordem de precedência.

    Ver a política completa na docstring do módulo.

    Raises:
        MergeError: Se nenhum documento contribuiu com conteúdo.
    """
    merged, _ = merge_with_report(documents)
    return merged
