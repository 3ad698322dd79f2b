"""Configuration loader for the feed ingest job and the reporting API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml
from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
CONFIG_ENV_VAR = "NEW_WORDS_CONFIG"

DEFAULT_FEED_URL = "https://meduza.io/rss/all"
DEFAULT_SEARCH_URL = "https://meduza.io/api/w5/search"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; new-words-ingest/1.0; +https://github.com/alexander37137/new-words)"
)


@dataclass
class FeedConfig:
    url: str = DEFAULT_FEED_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0


@dataclass
class SearchConfig:
    url: str = DEFAULT_SEARCH_URL
    locale: str = "ru"  # "ru" or "en"
    chrono: str = "news"
    per_page: int = 100
    max_pages: int = 50
    timeout: float = 30.0


@dataclass
class StoreConfig:
    backend: str = "sql"  # "sql" or "memory"
    url: str = "sqlite:///new_words.db"


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    top_words: int = 10


@dataclass
class Config:
    feed: FeedConfig = field(default_factory=FeedConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = CONFIG_ENV_VAR,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file, or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path.
                    If None, uses NEW_WORDS_CONFIG env var or "prod".

    Returns:
        Loaded Config object
    """
    return parse_config(load_yaml(find_config_path(config_name)))


def _int_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object, applying environment overrides."""
    feed_raw = data.get("feed", {}) or {}
    search_raw = data.get("search", {}) or {}
    store_raw = data.get("store", {}) or {}
    server_raw = data.get("server", {}) or {}

    feed = FeedConfig(
        url=feed_raw.get("url", DEFAULT_FEED_URL),
        user_agent=os.environ.get("MEDUZA_USER_AGENT", feed_raw.get("user_agent", DEFAULT_USER_AGENT)),
        timeout=float(feed_raw.get("timeout", 30.0)),
    )

    locale = os.environ.get("MEDUZA_LOCALE", search_raw.get("locale", "ru"))
    per_page = _int_env("MEDUZA_PER_PAGE") or search_raw.get("per_page", 100)
    search = SearchConfig(
        url=search_raw.get("url", DEFAULT_SEARCH_URL),
        locale="en" if locale == "en" else "ru",
        chrono=os.environ.get("MEDUZA_CHRONO", search_raw.get("chrono", "news")),
        per_page=max(1, int(per_page)),
        max_pages=max(1, int(search_raw.get("max_pages", 50))),
        timeout=float(search_raw.get("timeout", 30.0)),
    )

    store = StoreConfig(
        backend=store_raw.get("backend", "sql"),
        url=os.environ.get("DATABASE_URL", store_raw.get("url", "sqlite:///new_words.db")),
    )

    server = ServerConfig(
        host=server_raw.get("host", "0.0.0.0"),
        port=int(server_raw.get("port", 8000)),
        top_words=int(server_raw.get("top_words", 10)),
    )

    return Config(feed=feed, search=search, store=store, server=server)


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[Config] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
