from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STEAMWATCH_")

    DEBUG: bool = False

    API_KEY: SecretStr = SecretStr("")
    STEAM_ID: str = ""
    ACTION: str = "userStats"

    POLL_INTERVAL: int = 60


settings = Settings()
