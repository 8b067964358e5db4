"""Tests for configuration loading."""

import docchain.config
from docchain.config import Config, get_config, reload_config


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOCCHAIN_RATE_LIMIT_PER_MINUTE", raising=False)
        monkeypatch.delenv("DOCCHAIN_SEED_SAMPLE_DATA", raising=False)
        monkeypatch.delenv("DOCCHAIN_PUBLIC_BASE_URL", raising=False)
        config = Config()
        assert config.api_port == 8000
        assert config.rate_limit_per_minute == 120
        assert config.seed_sample_data is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("DOCCHAIN_API_PORT", "9100")
        monkeypatch.setenv("DOCCHAIN_LOG_LEVEL", "DEBUG")
        config = Config()
        assert config.api_port == 9100
        assert config.log_level == "DEBUG"

    def test_cors_origins_list(self):
        config = Config(cors_origins="http://a.test, http://b.test,,")
        assert config.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_port: 9200\nseed_sample_data: false\n")
        config = Config.from_yaml(path)
        assert config.api_port == 9200
        assert config.seed_sample_data is False

    def test_from_missing_yaml(self, tmp_path):
        assert isinstance(Config.from_yaml(tmp_path / "missing.yaml"), Config)

    def test_singleton_and_reload(self, tmp_path):
        docchain.config._config = None
        try:
            assert get_config() is get_config()
            path = tmp_path / "config.yaml"
            path.write_text("api_port: 9300\n")
            assert reload_config(path).api_port == 9300
            assert get_config().api_port == 9300
        finally:
            docchain.config._config = None
