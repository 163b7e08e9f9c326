"""
Configuration management for the Marking Assistant.

Uses Pydantic Settings for type-safe configuration loading from environment variables.
All configuration is validated at startup to fail fast on misconfiguration.
"""

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JudgeStrategy(str, Enum):
    """Strategy used to decide whether a criterion is satisfied."""

    RANDOM = "random"  # Placeholder coin flip, the legacy behaviour
    KEYWORD = "keyword"  # Deterministic word overlap
    LLM = "llm"  # Chat model verdict per criterion


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are validated at startup. Invalid values
    will raise clear validation errors.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Judge Configuration
    # ==========================================================================
    judge_strategy: JudgeStrategy = Field(
        default=JudgeStrategy.RANDOM,
        description="Strategy used to judge each marking criterion",
    )

    judge_pass_probability: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Probability that the random judge awards a criterion",
    )

    judge_seed: int | None = Field(
        default=None,
        description="Seed for the random judge (unseeded when empty)",
    )

    keyword_match_threshold: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Share of criterion keywords the answer must contain",
    )

    # ==========================================================================
    # Engine Configuration
    # ==========================================================================
    simulated_latency_seconds: float = Field(
        default=1.5,
        ge=0.0,
        le=30.0,
        description="Artificial delay applied to every grading call",
    )

    max_concurrent_gradings: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Upper bound on gradings running at once in a batch",
    )

    # ==========================================================================
    # LLM Configuration (only used by the llm judge)
    # ==========================================================================
    llm_api_key: str | None = Field(
        default=None,
        description="API key for the OpenAI-compatible endpoint",
    )

    llm_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL for the OpenAI-compatible endpoint",
    )

    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model used to judge criteria",
    )

    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Temperature for LLM generation (0.0 = deterministic)",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================
    log_level: str = Field(
        default="WARNING",
        description="Log level for the marking_assistant loggers",
    )

    @field_validator("llm_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL doesn't have trailing slash."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
