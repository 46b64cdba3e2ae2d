# src/kubemerge/core/config/hashing.py
"""
Hashing canônico de configuração e de conteúdo do kubemerge.

O hash gerado representa a identidade estrutural da configuração efetiva de
um run e é registrado em `RunContext.meta["config_hash"]`, permitindo
associar o kubeconfig produzido à configuração que o gerou.

Princípios fundamentais:
    - Hashing determinístico e reprodutível
    - Independente da ordem original das chaves
    - Baseado em serialização JSON canônica (SHA-256)

Limites explícitos:
    - Não carrega ou resolve configuração
    - Não persiste o hash
"""


import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva do run.

    Política de hashing (v1):
        - Serialização JSON canônica
        - Ordenação estável de chaves
        - Separadores compactos
        - Codificação UTF-8
        - Algoritmo SHA-256

    Invariantes:
        - O valor retornado é uma string hexadecimal de 64 caracteres
        - Configurações estruturalmente equivalentes produzem o mesmo hash
        - Nenhuma mutação ocorre sobre o input

    Args:
        config (Dict[str, Any]): Configuração efetiva do run.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_content_hash(text: str) -> str:
    """SHA-256 hexadecimal de um conteúdo textual (UTF-8).

    Usado como fingerprint dos kubeconfigs lidos e do kubeconfig gravado.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"Conteúdo para hashing deve ser str, recebido: {type(text).__name__}"
        )
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
