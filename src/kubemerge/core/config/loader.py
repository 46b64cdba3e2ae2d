# src/kubemerge/core/config/loader.py
"""
Loader canônico de configuração do kubemerge.

A configuração efetiva de um run é resolvida, nesta ordem de precedência
crescente, a partir de:
    - o arquivo de defaults empacotado (`config.defaults.yaml`, obrigatório)
    - um arquivo local de overrides (opcional, `--config` na CLI)
    - overrides programáticos (opcional, ex.: flags da CLI)

Responsabilidades do módulo:
    - Carregar arquivos de configuração em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver a configuração final via deep-merge determinístico

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida semântica das opções de cada Step (cada Step valida a sua)
    - Não expande `~` nem resolve caminhos (responsabilidade dos Steps)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    UnsupportedConfigFormatError,
)


DEFAULTS_PATH = Path(__file__).resolve().parent.parent.parent / "config.defaults.yaml"


def _load_file(path: Path, *, missing_error: type = ConfigFileNotFoundError) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios

    Args:
        path (Path): Caminho para o arquivo de configuração.
        missing_error (type): Exceção levantada quando o arquivo não existe.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigSyntaxError: Se o conteúdo não for YAML/JSON válido.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise missing_error(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidConfigSyntaxError(f"YAML inválido em {path}: {e}") from e

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidConfigSyntaxError(f"JSON inválido em {path}: {e}") from e

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva de um run do kubemerge.

    Política de resolução:
        - defaults (empacotados, a menos que `defaults_path` seja informado)
        - local, quando informado; um caminho explícito inexistente é erro
        - overrides programáticos por último

    Args:
        defaults_path: Caminho alternativo para o arquivo de defaults.
        local_path: Caminho opcional para overrides locais.
        overrides: Dicionário opcional aplicado por cima de tudo.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        ConfigFileNotFoundError: Se `local_path` for informado e não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigSyntaxError: Se o arquivo não for YAML/JSON válido.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """

    defaults_file = Path(defaults_path) if defaults_path is not None else DEFAULTS_PATH
    effective = _load_file(defaults_file, missing_error=DefaultsNotFoundError)

    if local_path is not None:
        local = _load_file(Path(local_path).expanduser())
        effective = deep_merge(effective, local)

    if overrides:
        effective = deep_merge(effective, overrides)

    return effective
