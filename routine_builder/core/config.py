from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ADVISOR_PERSONA = (
    "You are a friendly L'Oréal beauty advisor. Recommend routines using the selected products "
    "and keep the conversation focused on beauty care topics."
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Relay side: the credential never leaves this process.
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    OPENAI_MODEL_DEFAULT: str = "gpt-4o"
    OPENAI_MODEL_WEB_SEARCH: str = "gpt-4o-mini"

    OPENAI_TEMPERATURE: float = 0.8
    OPENAI_TOP_P: float = 1.0
    WEB_SEARCH_MAX_RESULTS: int = 3

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Client side
    RELAY_URL: str = ""
    RELAY_TIMEOUT_SECONDS: float = 60.0
    CATALOG_SOURCE: str = "./data/products.json"
    SELECTION_STORE_PATH: str = "./data/storage.json"
    SELECTION_STORAGE_KEY: str = "loreal-selected-products"
    ADVISOR_PERSONA: str = DEFAULT_ADVISOR_PERSONA


settings = Settings()
