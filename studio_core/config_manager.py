import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field


def _gemini_key_from_env() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


class PathsConfig(BaseModel):
    base_dir: str = Field(default=".")
    log_dir: str = Field(default="logs")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="10 days")
    compression: Optional[str] = Field(default="zip")
    error_file: bool = Field(default=True)
    json_sink: bool = Field(default=False)


class IntelligenceConfig(BaseModel):
    llm_provider: str = Field(default="gemini")
    model_name: str = Field(default="gemini-2.5-flash")
    max_tokens: int = Field(default=8192)
    gemini_api_key: Optional[str] = Field(default_factory=_gemini_key_from_env)
    openai_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    anthropic_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY"))


class StudioConfig(BaseModel):
    min_transcript_chars: int = Field(default=50)
    max_transcript_chars: int = Field(default=15000)
    session_ttl_seconds: int = Field(default=3600)
    max_sessions: int = Field(default=500)


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    intelligence: IntelligenceConfig = Field(default_factory=IntelligenceConfig)
    studio: StudioConfig = Field(default_factory=StudioConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


class ConfigManager:
    """
    Manages loading and validation of application configuration.
    """

    def __init__(self, config_path: str = "config/settings.yaml"):
        self.config_path = Path(config_path)
        self.config: AppConfig = self._load_config()

    def _load_config(self) -> AppConfig:
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found at {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

        return AppConfig(**raw_config)

    @property
    def paths(self) -> PathsConfig:
        return self.config.paths

    @property
    def logging(self) -> LoggingConfig:
        return self.config.logging

    @property
    def intelligence(self) -> IntelligenceConfig:
        return self.config.intelligence

    @property
    def studio(self) -> StudioConfig:
        return self.config.studio

    @property
    def server(self) -> ServerConfig:
        return self.config.server
