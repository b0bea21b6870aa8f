from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "SS_", "env_file": ".env", "env_file_encoding": "utf-8"}

    llm_provider: str = Field(default="openai", pattern=r"^(openai|anthropic)$")
    llm_model: str = Field(default="gpt-4o")
    llm_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    llm_timeout_seconds: float = Field(default=60.0, gt=0)
    openai_api_key: str = Field(default="")
    anthropic_api_key: str = Field(default="")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    cors_origins: str = Field(default="http://localhost:3000")

    # Advice policies
    concentration_threshold_pct: float = Field(default=30.0, gt=0.0, le=100.0)
    allocation_tolerance_pct: float = Field(default=1.0, ge=0.0)
    strict_concentration_policy: bool = Field(default=False)

    # Usage
    default_credits: int = Field(default=50, ge=0)
    usage_max_sessions: int = Field(default=10_000, gt=0)


settings = Settings()
