from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_CREDENTIAL_ENV_VARS = [
    "REACT_APP_API_KEY",
    "VITE_API_KEY",
    "NEXT_PUBLIC_API_KEY",
    "API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
]


class Settings(BaseSettings):
    model_config = {"env_prefix": "SENTIX_", "env_file": ".env", "env_file_encoding": "utf-8"}

    api_key: str = Field(default="")
    credential_env_vars: list[str] = Field(default_factory=lambda: list(DEFAULT_CREDENTIAL_ENV_VARS))
    llm_provider: str = Field(default="google", pattern=r"^google$")
    llm_model: str = Field(default="gemini-3-flash-preview")
    llm_temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    request_timeout: float = Field(default=120.0, gt=0.0)
    auto_load: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    cors_origins: str = Field(default="http://localhost:3000")


settings = Settings()
