"""
SubmitTrx Configuration Module

Loads environment variables for backend configuration, including the
partner credential table used for request authentication.
"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Security Notes:
    - Partner secrets are environment-based (PARTNERS as a JSON object)
    - The default partner table is for local demos only
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Partner credentials: partnerkey -> plaintext shared secret
    partners: Dict[str, str] = {
        "FAKEGOOGLE": "FAKEPASSWORD1234",
        "FAKEPEOPLE": "FAKEPASSWORD4578",
    }

    # Allowed clock skew between partner timestamp and server time
    timestamp_tolerance_seconds: int = 300

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug_reload: bool = False
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
