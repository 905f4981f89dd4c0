import pytest

from retype.spec.exceptions import ConfigurationError
from retype.workspace.config import DEFAULT_ENTRY_POINTS, load_config_from_path


def test_defaults_without_config_file(tmp_path):
    config = load_config_from_path(tmp_path)

    assert config.root_path == tmp_path.resolve()
    assert config.tsconfig is None
    assert config.tsconfig_path is None
    assert config.include == []
    assert config.entry_points == DEFAULT_ENTRY_POINTS
    assert config.require_tsconfig is False


def test_values_from_retype_toml(workspace_factory):
    root = workspace_factory.with_config(
        {
            "tsconfig": "config/tsconfig.json",
            "include": ["lib/**/*.ts"],
            "entry-points": ["app.ts"],
            "require-tsconfig": True,
        }
    ).build()

    config = load_config_from_path(root)

    assert config.tsconfig_path == root.resolve() / "config/tsconfig.json"
    assert config.include == ["lib/**/*.ts"]
    assert config.entry_points == ["app.ts"]
    assert config.require_tsconfig is True


def test_wrong_value_type_is_a_configuration_error(workspace_factory):
    root = workspace_factory.with_config({"include": "src"}).build()

    with pytest.raises(ConfigurationError):
        load_config_from_path(root)


def test_explicit_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config_from_path(tmp_path, config_file=tmp_path / "nope.toml")
