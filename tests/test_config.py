import json

import pytest

from auto_git.config import (
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    Config,
    find_legacy_config,
    get_config_path,
    load_config,
    save_config,
    set_endpoint,
    set_model,
    set_provider,
)
from auto_git.errors import ConfigLoadError


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "auto-git" / "config.json"


def test_missing_file_gives_defaults(config_path):
    config = load_config(config_path)
    assert config == Config(provider=DEFAULT_PROVIDER, endpoint="", model=DEFAULT_MODEL)


def test_save_creates_directory_and_roundtrips(config_path):
    save_config(Config(provider="ollama", endpoint="http://gpu:11434", model="qwen2.5"), config_path)
    assert json.loads(config_path.read_text()) == {
        "provider": "ollama",
        "endpoint": "http://gpu:11434",
        "model": "qwen2.5",
    }
    assert load_config(config_path).model == "qwen2.5"


def test_partial_file_falls_back_to_defaults(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"provider": "", "endpoint": "http://x", "extra": 1}))
    config = load_config(config_path)
    assert config.provider == DEFAULT_PROVIDER
    assert config.model == DEFAULT_MODEL
    assert config.endpoint == "http://x"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_malformed_file_raises(config_path, content):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(content)
    with pytest.raises(ConfigLoadError):
        load_config(config_path)


def test_setters_update_one_field(config_path):
    set_provider("openai", config_path)
    set_endpoint("https://proxy.example.com/v1", config_path)
    set_model("gpt-4o-mini", config_path)
    set_provider("ollama", config_path)

    config = load_config(config_path)
    assert config.provider == "ollama"
    assert config.endpoint == "https://proxy.example.com/v1"
    assert config.model == "gpt-4o-mini"


def test_config_dir_override(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTO_GIT_CONFIG_DIR", str(tmp_path))
    assert get_config_path() == tmp_path / "config.json"


def test_legacy_yaml_is_reported_only_without_json(config_path):
    config_path.parent.mkdir(parents=True)
    legacy = config_path.with_name("config.yaml")
    legacy.write_text("provider: ollama\nmodel: qwen2.5\n")

    assert find_legacy_config(config_path) == legacy
    assert load_config(config_path) == Config()

    save_config(Config(provider="ollama"), config_path)
    assert find_legacy_config(config_path) is None


def test_no_legacy_config(config_path):
    assert find_legacy_config(config_path) is None
