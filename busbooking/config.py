from pydantic_settings import BaseSettings
from typing import List, Optional
from decimal import Decimal

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./busbooking.db"
    DB_ECHO: bool = False
    
    # Security
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    
    # Application
    PROJECT_NAME: str = "BusLink Booking System"
    API_V1_STR: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000", "http://localhost:5173"]
    
    # Scheduling reference timezone for route search
    TIMEZONE: str = "UTC"
    
    # Booking rules
    BOOKING_NUMBER_PREFIX: str = "BK"
    BOOKING_NUMBER_MAX_ATTEMPTS: int = 5
    MAX_SEATS_PER_BOOKING: int = 5
    DEFAULT_COMMISSION_RATE: Decimal = Decimal("8.00")
    REVERSE_COMMISSION_ON_CANCEL: bool = True
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
