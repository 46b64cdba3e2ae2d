# src/kubemerge/core/config/merge.py
"""
Deep-merge da configuração da ferramenta.

Combina os defaults empacotados com o override local e com os overrides
vindos da linha de comando. Não confundir com o merge de kubeconfigs
(`kubemerge.core.merge`), que segue política de precedência própria.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (ex.: `exclude` do override substitui o default)
    - escalar → sobrescrita direta
    - None no override → sobrescreve (permite "desligar" um valor)
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - Chaves não sobrescritas são preservadas
    - Conflitos estruturais interrompem o merge
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _describe(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def deep_merge(
    base: Dict[str, Any],
    override: Dict[str, Any],
    *,
    _path: str = "",
) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
            A mensagem inclui o caminho completo da chave (ex.: `steps.parse.documents.on_error`).
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result or result[key] is None or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(
                base_value, override_value, _path=_describe(_path, key)
            )
            continue

        if isinstance(base_value, list) and isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # bool é subclasse de int: comparar tipos exatos
        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{_describe(_path, key)}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
