from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Business AR Pay Fees"

    # Remote services
    PAY_API_URL: str = "http://localhost:5000"
    PAY_API_VERSION: str = "/api/v1"
    BAR_API_URL: str = "http://localhost:5001"
    BAR_API_VERSION: str = "/api/v1"
    HTTP_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True

settings = Settings()
