from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SUPABASE_JWT_SECRET: str = ""
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
    ]

    # BR Code constants
    PIX_GUI: str = "br.gov.bcb.pix"
    PIX_CURRENCY_CODE: str = "986"
    PIX_COUNTRY_CODE: str = "BR"
    PIX_MERCHANT_CITY: str = "BRASIL"
    PIX_DEFAULT_REFERENCE: str = "***"
    PIX_PHONE_COUNTRY_CODE: str = "55"
    PIX_PAYLOAD_CACHE_SIZE: int = 256

    class Config:
        env_file = ".env"

settings = Settings()
