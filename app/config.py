# app/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseSettings):
    # Application Settings
    max_budget: float = 1000000
    max_days: int = 30
    allowed_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    log_level: str = "INFO"

    # Google Cloud Configuration
    project_id: str = ""
    region: str = "us-central1"
    port: int = 8080
    database: str = "(default)"

    # Secret Management
    google_api_key: str = ""
    service_account_key_path: str = ""

    # Gemini Configuration
    use_vertex_ai: bool = False
    gemini_model: str = "gemini-2.5-flash-lite"
    llm_temperature: float = 0.7
    llm_top_p: float = 0.95
    llm_max_output_tokens: int = 8192
    llm_timeout_seconds: float = 30.0

    # Firestore Collections
    itineraries_collection: str = "itineraries"
    users_collection: str = "users"

    # Pydantic V2 configuration (Python 3.13 compatible)
    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"  # Allow extra environment variables without validation errors
    )

class CloudRunConfig:
    """Configuration for Cloud Run deployment"""

    # Environment Detection
    IS_CLOUD_RUN: bool = os.getenv("K_SERVICE") is not None

    # Google Cloud Configuration
    PROJECT_ID: str = os.getenv("GOOGLE_CLOUD_PROJECT", "")
    PORT: int = int(os.getenv("PORT", "8080"))

    # Secret Manager Paths (for Cloud Run)
    @classmethod
    def get_gemini_api_key_secret_path(cls) -> str:
        return f"projects/{cls.PROJECT_ID}/secrets/gemini-api-key/versions/latest"

settings = Settings()
cloud_config = CloudRunConfig()
