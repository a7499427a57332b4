from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # database
    DATABASE_URL: str
    SQL_ECHO: bool = False

    # quiz codes
    QUIZ_CODE_LENGTH: int = 6
    QUIZ_CODE_MAX_ATTEMPTS: int = 20

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"


settings = Settings()
