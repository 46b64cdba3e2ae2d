# src/kubemerge/core/config/errors.py
"""
Exceções da camada de configuração do kubemerge.

Estas exceções representam falhas ao resolver a configuração *da ferramenta*
(defaults + override local). São distintas das exceções de domínio
(`ParseError`, `MergeError`, `ValidationError`), que tratam do conteúdo dos
kubeconfigs.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Erros de configuração são fatais: nenhum Step é executado

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine ou Steps
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do kubemerge.

    Permite captura genérica pela CLI, que traduz qualquer `ConfigError`
    para o código de saída de erro de configuração.
    """


class ConfigFileNotFoundError(ConfigError):
    """Um arquivo de configuração declarado explicitamente não existe."""


class DefaultsNotFoundError(ConfigFileNotFoundError):
    """
    O arquivo de configuração base (defaults) não foi encontrado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Sem defaults não existe configuração efetiva válida
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    O formato do arquivo de configuração não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigSyntaxError(ConfigError):
    """
    O arquivo de configuração existe, mas não é YAML/JSON válido.

    Encapsula `yaml.YAMLError` e `json.JSONDecodeError`; a exceção original
    fica disponível em `__cause__`.
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    O conteúdo raiz da configuração não é um dicionário (`dict`).

    Listas ou valores escalares no root são inválidos; o loader não tenta
    normalizá-los.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge de configuração.

    Exemplo de conflito:
        - base:     {"steps": {"discover.files": {"exclude": []}}}
        - override: {"steps": "nada"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito

    Limites explícitos:
        - Não realiza coerção ou conversão de tipos
    """
