from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_CONN_STRING: str = ""
    DB_DIALECT: str = "postgresql"
    DB_CREATE_SCHEMA: bool = True
    DB_CONNECT_ATTEMPTS: int = 1
    DB_CONNECT_TIMEOUT: int = 30
    TRUST_CLIENT_RESULTS: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
