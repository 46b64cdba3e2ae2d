# src/kubemerge/core/kubeconfig/codec.py
"""
Codec YAML de kubeconfigs: `parse` (texto → Document) e `serialize`
(MergedDocument → texto).

Parse:
    - texto vazio / só espaços / `null` → Document em branco (não é erro)
    - YAML malformado ou raiz não-mapa → ParseError
    - registro sem `name`, cluster sem `server`, context sem `cluster`/`user`
      → ParseError (campos estruturalmente obrigatórios)
    - campo conhecido com tipo errado → ParseError
    - campo conhecido explicitamente `null` → tratado como ausente
    - campo desconhecido → guardado em `extra` do registro, sem alteração

Serialize:
    - ordem canônica dos campos (apiVersion, kind, clusters, contexts, users,
      current-context, preferences; dentro de cada registro, campos
      conhecidos na ordem do schema seguidos dos campos de `extra`)
    - campos opcionais ausentes e coleções vazias são omitidos
    - `extra` é reemitido no mesmo nível de aninhamento em que foi lido

Limites explícitos:
    - Não valida referências entre registros
    - Não faz merge
    - Chaves desconhecidas do nível raiz não são registros e são descartadas
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import yaml  # PyYAML

from kubemerge.core.exceptions import ParseError

from .model import (
    Cluster,
    Context,
    Document,
    MergedDocument,
    NamedEntity,
    User,
)


R = TypeVar("R")

# (chave YAML, atributo python, tipo esperado)
FieldSpec = Tuple[str, str, type]

CLUSTER_FIELDS: Tuple[FieldSpec, ...] = (
    ("certificate-authority-data", "certificate_authority_data", str),
    ("certificate-authority", "certificate_authority", str),
    ("server", "server", str),
    ("insecure-skip-tls-verify", "insecure_skip_tls_verify", bool),
)
CONTEXT_FIELDS: Tuple[FieldSpec, ...] = (
    ("cluster", "cluster", str),
    ("user", "user", str),
    ("namespace", "namespace", str),
)
USER_FIELDS: Tuple[FieldSpec, ...] = (
    ("client-certificate-data", "client_certificate_data", str),
    ("client-key-data", "client_key_data", str),
    ("client-certificate", "client_certificate", str),
    ("client-key", "client_key", str),
    ("token", "token", str),
    ("username", "username", str),
    ("password", "password", str),
)

# categoria → (chave do payload, classe, campos, obrigatórios)
_CATEGORIES: Dict[str, Tuple[str, type, Tuple[FieldSpec, ...], Tuple[str, ...]]] = {
    "clusters": ("cluster", Cluster, CLUSTER_FIELDS, ("server",)),
    "contexts": ("context", Context, CONTEXT_FIELDS, ("cluster", "user")),
    "users": ("user", User, USER_FIELDS, ()),
}

_TOP_LEVEL_ORDER = (
    "apiVersion",
    "kind",
    "clusters",
    "contexts",
    "users",
    "current-context",
    "preferences",
)


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------

def _fail(message: str, *, source: Optional[str], location: str) -> ParseError:
    return ParseError(
        message=f"{source or '<input>'}: {message} ({location})",
        details={"source": source, "location": location},
        hint="Corrija o documento de entrada ou use on_error=skip para ignorá-lo.",
    )


def _type_name(expected: type) -> str:
    return "bool" if expected is bool else "string"


def _parse_record(
    raw: Any,
    *,
    cls: Type[R],
    fields: Tuple[FieldSpec, ...],
    required: Tuple[str, ...],
    source: Optional[str],
    location: str,
) -> R:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise _fail(
            f"esperado mapa, recebido {type(raw).__name__}",
            source=source,
            location=location,
        )

    known = {yaml_key for yaml_key, _, _ in fields}
    kwargs: Dict[str, Any] = {}

    for yaml_key, attr, expected in fields:
        value = raw.get(yaml_key)
        if value is None:
            if yaml_key in required:
                raise _fail(
                    f"campo obrigatório ausente: '{yaml_key}'",
                    source=source,
                    location=location,
                )
            continue
        if not isinstance(value, expected):
            raise _fail(
                f"campo '{yaml_key}' deve ser {_type_name(expected)}, "
                f"recebido {type(value).__name__}",
                source=source,
                location=f"{location}.{yaml_key}",
            )
        kwargs[attr] = value

    kwargs["extra"] = {k: v for k, v in raw.items() if k not in known}
    return cls(**kwargs)


def _parse_category(
    raw: Any,
    *,
    category: str,
    source: Optional[str],
) -> Optional[Tuple[NamedEntity, ...]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise _fail(
            f"'{category}' deve ser uma lista, recebido {type(raw).__name__}",
            source=source,
            location=category,
        )

    payload_key, cls, fields, required = _CATEGORIES[category]
    entities: List[NamedEntity] = []

    for index, item in enumerate(raw):
        location = f"{category}[{index}]"
        if not isinstance(item, dict):
            raise _fail(
                f"esperado mapa, recebido {type(item).__name__}",
                source=source,
                location=location,
            )

        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise _fail(
                "campo obrigatório ausente: 'name'",
                source=source,
                location=location,
            )

        if item.get(payload_key) is None and required:
            raise _fail(
                f"campo obrigatório ausente: '{payload_key}'",
                source=source,
                location=location,
            )

        payload = _parse_record(
            item.get(payload_key),
            cls=cls,
            fields=fields,
            required=required,
            source=source,
            location=f"{location}.{payload_key}",
        )
        extra = {k: v for k, v in item.items() if k not in ("name", payload_key)}
        entities.append(NamedEntity(name=name, payload=payload, extra=extra))

    return tuple(entities)


def _optional_str(raw: Dict[str, Any], key: str, *, source: Optional[str]) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _fail(
            f"campo '{key}' deve ser string, recebido {type(value).__name__}",
            source=source,
            location=key,
        )
    return value


def parse(raw_text: str, *, source: Optional[str] = None) -> Document:
    """
    Faz o parse de um kubeconfig em texto YAML.

    Args:
        raw_text: Conteúdo do documento.
        source: Identificador de proveniência (ex.: caminho do arquivo),
            usado nas mensagens de erro e preservado no Document.

    Returns:
        Document: Documento imutável; em branco quando o texto é vazio.

    Raises:
        ParseError: YAML malformado, raiz não-mapa, campo obrigatório
            ausente ou campo conhecido com tipo inválido.
    """
    if not raw_text.strip():
        return Document(source=source)

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise ParseError(
            message=f"{source or '<input>'}: YAML inválido: {e}",
            details={"source": source, "location": "<root>"},
            hint="Verifique a sintaxe YAML do documento.",
        ) from e

    if data is None:
        return Document(source=source)
    if not isinstance(data, dict):
        raise _fail(
            f"raiz do documento deve ser mapa, recebido {type(data).__name__}",
            source=source,
            location="<root>",
        )

    preferences = data.get("preferences")
    if preferences is None:
        preferences = {}
    if not isinstance(preferences, dict):
        raise _fail(
            f"'preferences' deve ser mapa, recebido {type(preferences).__name__}",
            source=source,
            location="preferences",
        )

    return Document(
        clusters=_parse_category(data.get("clusters"), category="clusters", source=source),
        contexts=_parse_category(data.get("contexts"), category="contexts", source=source),
        users=_parse_category(data.get("users"), category="users", source=source),
        current_context=_optional_str(data, "current-context", source=source) or "",
        preferences=dict(preferences),
        api_version=_optional_str(data, "apiVersion", source=source),
        kind=_optional_str(data, "kind", source=source),
        source=source,
    )


# ---------------------------------------------------------------------------
# Serialize
# ---------------------------------------------------------------------------

def _record_to_dict(record: Any, fields: Tuple[FieldSpec, ...]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for yaml_key, attr, _ in fields:
        value = getattr(record, attr)
        if value is not None:
            out[yaml_key] = value
    for key, value in record.extra.items():
        out.setdefault(key, value)
    return out


def _category_to_list(
    entities: Tuple[NamedEntity, ...],
    *,
    category: str,
) -> List[Dict[str, Any]]:
    payload_key, _, fields, _ = _CATEGORIES[category]
    items: List[Dict[str, Any]] = []
    for entity in entities:
        item: Dict[str, Any] = {
            "name": entity.name,
            payload_key: _record_to_dict(entity.payload, fields),
        }
        for key, value in entity.extra.items():
            item.setdefault(key, value)
        items.append(item)
    return items


def to_dict(document: MergedDocument) -> Dict[str, Any]:
    """Representação em dicionário, na ordem canônica, sem campos ausentes."""
    out: Dict[str, Any] = {
        "apiVersion": document.api_version,
        "kind": document.kind,
    }
    for category in ("clusters", "contexts", "users"):
        entities = getattr(document, category)
        if entities:
            out[category] = _category_to_list(entities, category=category)
    if document.current_context:
        out["current-context"] = document.current_context
    if document.preferences:
        out["preferences"] = dict(document.preferences)
    return {key: out[key] for key in _TOP_LEVEL_ORDER if key in out}


def serialize(document: MergedDocument) -> str:
    """
    Serializa o documento mesclado como YAML.

    A saída é determinística para a mesma entrada: `sort_keys=False`
    preserva a ordem canônica montada por `to_dict`.
    """
    return yaml.safe_dump(
        to_dict(document),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
