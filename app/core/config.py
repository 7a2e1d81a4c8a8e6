from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://postgres@localhost/resume_manager"
    jwt_secret: str = "secret-dev"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # bcrypt work factor; tests run with 4
    bcrypt_rounds: int = 12

    log_level: str = "INFO"
    sql_echo: bool = False
    cors_origins: List[str] = ["*"]

    master_document_name: str = "Master Resume"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
