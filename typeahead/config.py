from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Durable store
    store_backend: str = "redis"  # redis, memory
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 2.0  # seconds
    frequency_key_prefix: str = "query:frequency:"

    # Suggestions
    max_suggestions: int = 10
    max_suggestions_cap: int = 50
    popular_default_limit: int = 10
    suggestion_cache_size: int = 1024  # cached prefixes
    persist_seed_queries: bool = True

    # App
    app_name: str = "Typeahead API"
    app_version: str = "1.0.0"
    debug: bool = False
    slow_request_ms: float = 250.0  # requests slower than this log at WARNING


settings = Settings()
