"""Tests for common.config module."""

from pathlib import Path

import pytest

from common.config import (
    Config,
    ConfigSingleton,
    find_config_path,
    load_config,
    parse_config,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("DATABASE_URL", "MEDUZA_USER_AGENT", "MEDUZA_LOCALE", "MEDUZA_CHRONO", "MEDUZA_PER_PAGE"):
        monkeypatch.delenv(name, raising=False)


class TestParseConfig:
    def test_defaults(self) -> None:
        config = parse_config({})
        assert config.feed.url == "https://meduza.io/rss/all"
        assert config.search.url == "https://meduza.io/api/w5/search"
        assert config.search.per_page == 100
        assert config.store.backend == "sql"
        assert config.server.top_words == 10

    def test_reads_sections(self) -> None:
        config = parse_config({
            "feed": {"url": "https://example.com/rss", "timeout": 5},
            "search": {"locale": "en", "per_page": 20, "max_pages": 3},
            "store": {"backend": "memory"},
        })
        assert config.feed.url == "https://example.com/rss"
        assert config.feed.timeout == 5.0
        assert config.search.locale == "en"
        assert config.search.per_page == 20
        assert config.search.max_pages == 3
        assert config.store.backend == "memory"

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("MEDUZA_USER_AGENT", "custom-agent")
        monkeypatch.setenv("MEDUZA_LOCALE", "en")
        monkeypatch.setenv("MEDUZA_CHRONO", "articles")
        monkeypatch.setenv("MEDUZA_PER_PAGE", "25")

        config = parse_config({"store": {"url": "sqlite:///words.db"}})

        assert config.store.url == "sqlite:///other.db"
        assert config.feed.user_agent == "custom-agent"
        assert config.search.locale == "en"
        assert config.search.chrono == "articles"
        assert config.search.per_page == 25

    def test_unknown_locale_falls_back_to_ru(self) -> None:
        assert parse_config({"search": {"locale": "de"}}).search.locale == "ru"

    def test_per_page_at_least_one(self) -> None:
        assert parse_config({"search": {"per_page": 0}}).search.per_page == 1


class TestFindConfigPath:
    def test_named_config(self, tmp_path: Path) -> None:
        (tmp_path / "test.yaml").write_text("{}")
        assert find_config_path("test", tmp_path) == tmp_path / "test.yaml"

    def test_env_var_default(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "staging.yaml").write_text("{}")
        monkeypatch.setenv("NEW_WORDS_CONFIG", "staging")
        assert find_config_path(None, tmp_path) == tmp_path / "staging.yaml"

    def test_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_config_path("missing", tmp_path)


class TestLoadConfig:
    def test_loads_yaml_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("store:\n  backend: memory\nserver:\n  port: 9000\n")

        config = load_config(str(path))

        assert config.store.backend == "memory"
        assert config.server.port == 9000

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert isinstance(load_config(str(path)), Config)


class TestConfigSingleton:
    def test_lazy_load_and_reset(self) -> None:
        calls = []

        def loader() -> Config:
            calls.append(1)
            return Config()

        manager = ConfigSingleton(loader)
        first = manager.get()
        assert manager.get() is first
        manager.reset()
        manager.get()
        assert len(calls) == 2

    def test_set_overrides(self) -> None:
        manager = ConfigSingleton()
        config = Config()
        manager.set(config)
        assert manager.get() is config

    def test_no_loader_raises(self) -> None:
        with pytest.raises(RuntimeError):
            ConfigSingleton().get()
