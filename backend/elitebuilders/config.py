from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, HttpUrl
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    openai_api_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("OPENAI_API_KEY", "GROQ_API_KEY")
    )
    openai_api_base: Optional[HttpUrl] = Field(
        default="https://api.groq.com/openai/v1", alias="OPENAI_API_BASE"
    )  # any OpenAI-compatible endpoint
    openai_model: str = Field(default="llama-3.3-70b-versatile", alias="OPENAI_MODEL")
    llm_max_tokens: int = Field(default=1000, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(default=60, alias="LLM_TIMEOUT_SECONDS")
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    github_timeout_seconds: float = Field(default=30, alias="GITHUB_TIMEOUT_SECONDS")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
