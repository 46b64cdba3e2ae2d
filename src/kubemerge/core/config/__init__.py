# src/kubemerge/core/config/__init__.py

"""
Camada de configuração da ferramenta kubemerge.

Este pacote resolve a configuração de *execução* do kubemerge (onde procurar
kubeconfigs, quais arquivos excluir, para onde gravar, política de erro de
parse). Ele não conhece o conteúdo dos kubeconfigs: o merge de documentos
kubeconfig vive em `kubemerge.core.merge`, com regras próprias.

A configuração da ferramenta é:
    - declarativa
    - determinística
    - resolvida a partir de defaults empacotados + override local opcional

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (YAML ou JSON)
    - Resolução da configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade do run

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não lê nem interpreta kubeconfigs
    - Não executa pipeline
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_content_hash
from .loader import DEFAULTS_PATH, load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigSyntaxError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "compute_content_hash",
    "DEFAULTS_PATH",
    "load_config",
    "deep_merge",
]
