from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STATE_PROVIDER: str = "memory"  # memory | json
    STATE_DIR: str = "./data/conversations"

    RECOGNIZER_PROVIDER: str = "auto"  # auto | mock | clu | openai

    CLU_ENDPOINT: str | None = None
    CLU_API_KEY: str | None = None
    CLU_PROJECT_NAME: str = "FlightBooking"
    CLU_DEPLOYMENT_NAME: str = "production"
    CLU_API_VERSION: str = "2023-04-01"
    CLU_LANGUAGE: str = "en-us"
    CLU_VERBOSE: bool = True

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_RECOGNIZE: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_RECOGNIZE: float = 0.0

    # comma separated caller ids, "*" allows any caller
    ALLOWED_CALLERS: str = "*"


settings = Settings()
