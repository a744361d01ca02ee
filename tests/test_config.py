import json

import pytest

from core import config as config_module
from core.config import Config, load_config


@pytest.fixture
def config_paths(tmp_path, monkeypatch):
    config_dir = tmp_path / "search-proxy"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    return config_file


def test_defaults():
    config = Config()
    assert config.proxy.port == 3000
    assert config.upstream.timeout is None
    assert config.upstream.follow_redirects is True
    assert config.rewrite.marker == "www.google.com"
    assert config.rewrite.base_url == "https://www.google.com"
    assert (config.static.public_dir / "index.html").exists()


def test_load_creates_default_file(config_paths):
    config = load_config()

    assert config == Config()
    assert config_paths.exists()
    assert json.loads(config_paths.read_text())["proxy"]["port"] == 3000


def test_load_reads_existing_file(config_paths):
    config_paths.parent.mkdir(parents=True)
    config_paths.write_text(json.dumps({"proxy": {"port": 8081}, "upstream": {"timeout": 5}}))

    config = load_config()

    assert config.proxy.port == 8081
    assert config.upstream.timeout == 5.0
    assert config.rewrite.marker == "www.google.com"


def test_load_replaces_corrupt_file(config_paths):
    config_paths.parent.mkdir(parents=True)
    config_paths.write_text("{not json")

    config = load_config()

    assert config == Config()
    assert config_paths.with_suffix(".json.bak").read_text() == "{not json"
    assert json.loads(config_paths.read_text())["rewrite"]["marker"] == "www.google.com"


def test_load_replaces_invalid_values(config_paths):
    config_paths.parent.mkdir(parents=True)
    config_paths.write_text(json.dumps({"proxy": {"port": "not-a-port"}}))

    assert load_config() == Config()
    assert config_paths.with_suffix(".json.bak").exists()
