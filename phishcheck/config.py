from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # API Configuration
    APP_NAME: str = "PhishCheck"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    # Weights and allow/deny lists live here
    DATABASE_URL: str = "sqlite:///./data/phishcheck.db"
    
    # Signal and hint language ("en" or "th")
    LANGUAGE: str = "en"
    
    # Risk Scoring Thresholds
    MALICIOUS_THRESHOLD: int = 70
    SUSPICIOUS_THRESHOLD: int = 40
    
    # Which list wins when a domain sits in both ("deny" or "allow")
    LIST_PRECEDENCE: str = "deny"
    
    # Ingestion / export
    MAX_UPLOAD_SIZE_MB: int = 5
    SNIPPET_LENGTH: int = 8000
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
