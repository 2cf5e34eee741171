from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when a required setting is missing"""


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class OpenAIConfig:
    api_key: str
    model: str = "gpt-4o-mini"
    evaluator_temperature: float = 0.1
    supervisor_temperature: float = 0.2
    timeout_seconds: float = 60.0


@dataclass
class TriageConfig:
    spam_threshold: int = 70
    handle_threshold: int = 50
    evaluation_timeout_seconds: float = 90.0
    conflict_timeout_seconds: float = 60.0
    spam_filter: str = "llm"  # "llm" or "keywords"


@dataclass
class AppConfig:
    openai: OpenAIConfig
    triage: TriageConfig = field(default_factory=TriageConfig)


def load_config() -> AppConfig:
    load_dotenv()

    openai_key = os.getenv("OPENAI_API_KEY")
    if not openai_key:
        raise ConfigError("Missing required environment variables: OPENAI_API_KEY")

    openai_cfg = OpenAIConfig(
        api_key=openai_key,
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        evaluator_temperature=_get_float("OPENAI_EVALUATOR_TEMPERATURE", 0.1),
        supervisor_temperature=_get_float("OPENAI_SUPERVISOR_TEMPERATURE", 0.2),
        timeout_seconds=_get_float("OPENAI_TIMEOUT_SECONDS", 60.0),
    )

    spam_filter = os.getenv("TRIAGE_SPAM_FILTER", "llm").strip().lower()
    if spam_filter not in {"llm", "keywords"}:
        spam_filter = "llm"

    triage_cfg = TriageConfig(
        spam_threshold=_get_int("TRIAGE_SPAM_THRESHOLD", 70),
        handle_threshold=_get_int("TRIAGE_HANDLE_THRESHOLD", 50),
        evaluation_timeout_seconds=_get_float("TRIAGE_EVALUATION_TIMEOUT_SECONDS", 90.0),
        conflict_timeout_seconds=_get_float("TRIAGE_CONFLICT_TIMEOUT_SECONDS", 60.0),
        spam_filter=spam_filter,
    )

    return AppConfig(openai=openai_cfg, triage=triage_cfg)
