"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from news_monitor.core import Vocabulary, load_vocabulary


@dataclass
class ClaudeConfig:
    """Claude API settings."""
    model: str = "claude-3-5-haiku-20241022"
    max_tokens: int = 2048
    temperature: float = 0.2
    max_retries: int = 5
    initial_retry_delay: float = 2.0
    request_delay: float = 1.0
    batch_size: int = 5


@dataclass
class FetchConfig:
    """Feed fetching settings."""
    scope: str = "jp"
    timeout: float = 8.0
    user_agent: Optional[str] = None
    use_secondary_source: bool = True
    transports: list = field(default_factory=lambda: [
        {"name": "direct", "prefix": ""},
        {"name": "allorigins", "prefix": "https://api.allorigins.win/raw?url="},
        {"name": "rss2json", "prefix": "https://api.rss2json.com/v1/api.json?rss_url="},
    ])


@dataclass
class PipelineConfig:
    """Per-run pipeline settings."""
    limit_per_keyword: int = 10
    max_scored_per_keyword: int = 20
    similarity_threshold: float = 0.75
    max_concurrency: int = 1
    keyword_delay: float = 1.0
    debug_clusters: bool = False


@dataclass
class CacheConfig:
    """Result cache settings."""
    enabled: bool = True
    ttl_seconds: int = 86400
    timezone: str = "Asia/Tokyo"


@dataclass
class PathsConfig:
    """Path settings."""
    cache_dir: Path = Path(".cache/news")


@dataclass
class PromptsConfig:
    """Prompts for LLM."""
    scoring: dict = field(default_factory=lambda: {
        "system": (
            "あなたは日本語のニュース記事を評価・要約する専門家です。"
            "要約は60文字以内で1文にまとめてください。"
        ),
        "user": (
            "キーワード「{keyword}」に関する以下の{count}件の記事を評価してください。\n\n"
            "{articles_json}\n\n"
            "各記事について、入力と同じ順序で次の形式のJSON配列のみを返してください:\n"
            '[{{"keep": true, "relevance": 0.0, "importance": 0.0, "summary": "60文字以内の1文要約"}}]\n'
            "keep: キーワードの業界ニュースとして掲載すべきか\n"
            "relevance, importance: 0から1の数値"
        ),
    })


@dataclass
class Settings:
    """Application settings."""

    # API Keys (from environment only)
    anthropic_api_key: str = ""
    preset_keywords: list[str] = field(default_factory=list)

    # Config sections
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)
    vocabulary: Vocabulary = field(default_factory=load_vocabulary)

    @property
    def claude_model(self) -> str:
        return self.claude.model

    @property
    def has_api_key(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def default_keywords(self) -> list[str]:
        """Preset keywords from the environment, else the bundled list."""
        return self.preset_keywords or list(self.vocabulary.default_keywords)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_keywords(value: Optional[str]) -> list[str]:
    """Split a comma-separated keyword list, dropping blanks."""
    if not value:
        return []
    return [kw.strip() for kw in value.split(",") if kw.strip()]


def _apply_section(section: Any, values: dict) -> None:
    for key, value in values.items():
        if not hasattr(section, key):
            raise ValueError(f"Unknown config option: {type(section).__name__}.{key}")
        setattr(section, key, value)


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    # Load YAML config
    config = load_config(config_path)

    settings = Settings(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        preset_keywords=parse_keywords(os.getenv("PRESET_KEYWORDS")),
        vocabulary=load_vocabulary(config.get("vocabulary")),
    )

    # Apply YAML config
    if "claude" in config:
        _apply_section(settings.claude, config["claude"])

    if "fetch" in config:
        _apply_section(settings.fetch, config["fetch"])

    if "pipeline" in config:
        _apply_section(settings.pipeline, config["pipeline"])

    if "cache" in config:
        _apply_section(settings.cache, config["cache"])

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "prompts" in config:
        settings.prompts = PromptsConfig(**config["prompts"])

    return settings
