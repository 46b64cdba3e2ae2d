# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Os testes asseguram que:
- os defaults empacotados são carregados quando nenhum caminho é informado
- o arquivo defaults é obrigatório
- um arquivo local explicitamente informado precisa existir
- formatos, sintaxe e raízes inválidas são rejeitados
- overrides programáticos (flags da CLI) são aplicados por último

Limites explícitos:
    - Não valida hashing de configuração
    - Não valida integração com engine ou pipeline
"""

import json
from pathlib import Path

import pytest

try:
    from kubemerge.core.config.loader import DEFAULTS_PATH, load_config
    from kubemerge.core.config.errors import (
        ConfigFileNotFoundError,
        ConfigTypeConflictError,
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        InvalidConfigSyntaxError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing kubemerge.core.config modules. Import error: {_IMPORT_ERR}")


def test_packaged_defaults_are_loaded():
    _require_imports()
    assert DEFAULTS_PATH.exists()

    out = load_config()

    assert out["engine"]["fail_fast"] is True
    assert out["engine"]["log_level"] == "INFO"
    assert out["steps"]["discover.files"]["input_dir"] == "~/.kube"
    assert out["steps"]["discover.files"]["extensions"] == [".yaml", ".yml"]
    assert out["steps"]["parse.documents"]["on_error"] == "abort"
    assert out["steps"]["export.kubeconfig"]["output"] == "~/.kube/config"
    assert out["steps"]["export.kubeconfig"]["file_mode"] == "0600"
    assert out["steps"]["export.kubeconfig"]["backup"] is True


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=tmp_path / "defaults.yaml")


def test_missing_explicit_local_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(ConfigFileNotFoundError):
        load_config(local_path=tmp_path / "nope.yaml")


def test_defaults_and_local(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text(
        "engine:\n  log_level: DEBUG\nsteps:\n  discover.files:\n    exclude: [backup]\n",
        encoding="utf-8",
    )

    out = load_config(local_path=local)

    assert out["engine"]["log_level"] == "DEBUG"
    assert out["engine"]["fail_fast"] is True
    assert out["steps"]["discover.files"]["exclude"] == ["backup"]
    assert out["steps"]["discover.files"]["input_dir"] == "~/.kube"


def test_json_local_is_supported(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text(json.dumps({"engine": {"fail_fast": False}}), encoding="utf-8")

    out = load_config(local_path=local)

    assert out["engine"]["fail_fast"] is False


def test_empty_local_file_is_empty_override(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("", encoding="utf-8")

    assert load_config(local_path=local) == load_config()


def test_overrides_are_applied_last(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("steps:\n  export.kubeconfig:\n    output: /tmp/a\n", encoding="utf-8")

    out = load_config(
        local_path=local,
        overrides={"steps": {"export.kubeconfig": {"output": "/tmp/b"}}},
    )

    assert out["steps"]["export.kubeconfig"]["output"] == "/tmp/b"


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(local_path=local)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.toml"
    local.write_text("a = 1\n", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(local_path=local)


def test_type_conflict_with_defaults_raises(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("steps:\n  export.kubeconfig:\n    backup: 'yes'\n", encoding="utf-8")

    with pytest.raises(ConfigTypeConflictError) as exc:
        load_config(local_path=local)
    assert "steps.export.kubeconfig.backup" in str(exc.value)


def test_malformed_yaml_raises_config_error(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("steps: [unclosed\n", encoding="utf-8")

    with pytest.raises(InvalidConfigSyntaxError) as exc:
        load_config(local_path=local)
    assert str(local) in str(exc.value)
    assert exc.value.__cause__ is not None


def test_malformed_json_raises_config_error(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text('{"engine": ', encoding="utf-8")

    with pytest.raises(InvalidConfigSyntaxError):
        load_config(local_path=local)
