# app/config.py
from typing import Dict, List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === API ===
    api_title: str = "Phone Diff Report API"
    api_version: str = "0.4.0"

    # === Logging ===
    log_level: str = "INFO"

    # === Sanitizer ===
    invisible_placeholder: str = "␣"

    # === Separator profiles ===
    default_separator_profile: str = "default"
    # suggested value prefix -> profile (e.g. German numbers may contain '/')
    profile_prefixes: Dict[str, str] = {"+49": "de"}

    # === CORS ===
    cors_origins: List[str] = ["*"]

    # === Tag diff ===
    tag_namespace: str = "contact:"

settings = Settings()
