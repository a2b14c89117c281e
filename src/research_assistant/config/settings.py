"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.7
    gemini_max_tokens: int = 2048

    # Annotation (empty URL = score in-process)
    annotator_url: str = ""
    annotator_timeout_s: float = 5.0

    # Sentiment scoring
    sentiment_step: float = 0.1

    # Complexity scoring weights and reference scales
    cx_w_word_length: float = 0.30
    cx_w_sentence_length: float = 0.30
    cx_w_technical: float = 0.25
    cx_code_bonus: float = 0.15
    cx_ref_word_length: float = 10.0
    cx_ref_sentence_length: float = 30.0
    cx_ref_technical_fraction: float = 0.2

    # Token cost estimate
    cost_per_1k_tokens: float = 0.03

    # Storage paths
    sqlite_db_path: str = "data/research.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Auth / JWT
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = 60
    api_keys: str = ""  # comma-separated list of valid API keys

    # Rate limiting
    rate_limit_requests_per_minute: int = 60

    model_config = {"env_file": ".env", "env_prefix": "RA_"}
