import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from dotenv import load_dotenv

from article_models import ConfigurationError, PromptSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PUBLISH_STATUSES = ("draft", "publish")

T = TypeVar("T")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 3500
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 60

    @classmethod
    def from_env(cls) -> "OpenAIConfig":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            model=_env("OPENAI_MODEL", cls.model, str),
            temperature=_env("OPENAI_TEMPERATURE", cls.temperature, float),
            max_tokens=_env("OPENAI_MAX_TOKENS", cls.max_tokens, int),
            base_url=_env("OPENAI_BASE_URL", cls.base_url, str),
            timeout=_env("OPENAI_TIMEOUT", cls.timeout, float),
        )


@dataclass(frozen=True)
class WordPressConfig:
    """Connection details for the /wp-json/wp/v2 REST root."""

    api_url: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_env(cls) -> "WordPressConfig":
        return cls(
            api_url=os.getenv("WP_API_URL", "").rstrip("/"),
            username=os.getenv("WP_USERNAME", ""),
            password=os.getenv("WP_PASSWORD", ""),
        )


@dataclass(frozen=True)
class AppSettings:
    min_words: int = 800
    publish_status: str = "draft"
    delay_between_posts: float = 5

    @classmethod
    def from_env(cls) -> "AppSettings":
        status = _env("PUBLISH_STATUS", cls.publish_status, str).lower()
        if status not in PUBLISH_STATUSES:
            raise ConfigurationError(f"PUBLISH_STATUS must be one of {PUBLISH_STATUSES}, got {status!r}")
        return cls(
            min_words=_env("MIN_WORDS", cls.min_words, int),
            publish_status=status,
            delay_between_posts=_env("DELAY_BETWEEN_POSTS", cls.delay_between_posts, float),
        )


def load_environment(dotenv_path: Optional[str] = None) -> None:
    """Load a .env file into the process environment without overriding it."""
    load_dotenv(dotenv_path)


def load_prompt_settings(path: Optional[str]) -> PromptSettings:
    """Read prompt settings from a JSON file, or return the defaults."""
    if not path:
        return PromptSettings()
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Prompt settings file not found: {file_path}")
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ConfigurationError(f"Prompt settings file is not valid JSON: {e}") from e
    if isinstance(data, dict) and isinstance(data.get("prompts"), dict):
        data = data["prompts"]
    if not isinstance(data, dict):
        raise ConfigurationError("Prompt settings file must contain a JSON object")
    settings = PromptSettings.from_dict(data)
    logger.info(f"Prompt settings loaded from {file_path}")
    return settings


def validate_config(
    openai: OpenAIConfig,
    wordpress: WordPressConfig,
    prompts: Optional[PromptSettings] = None,
    require_wordpress: bool = True
) -> None:
    missing: List[str] = []
    if require_wordpress:
        if not wordpress.api_url:
            missing.append("WordPress API URL (WP_API_URL)")
        if not wordpress.username:
            missing.append("WordPress Username (WP_USERNAME)")
        if not wordpress.password:
            missing.append("WordPress Password (WP_PASSWORD)")
    if not openai.api_key:
        missing.append("OpenAI API Key (OPENAI_API_KEY)")
    if missing:
        raise ConfigurationError("Missing required configuration values: " + ", ".join(missing))

    if prompts and prompts.use_multi_part_generation:
        missing_prompts = [
            label for label, value in (
                ("Part 1 Prompt", prompts.part1_prompt),
                ("Part 2 Prompt", prompts.part2_prompt),
                ("Part 3 Prompt", prompts.part3_prompt),
            ) if not value
        ]
        if missing_prompts:
            logger.warning(
                f"Multi-part generation is enabled but some prompts are missing: "
                f"{', '.join(missing_prompts)}. Default prompts will be used for missing parts."
            )
