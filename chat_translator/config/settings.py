"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EngineFailurePolicy(str, Enum):
    """What the orchestrator does when the local engine raises"""
    FALLBACK = "fallback"
    PROPAGATE = "propagate"


class TranslationSettings(BaseSettings):
    """Translation pipeline configuration"""

    data_dir: str = Field(default="data", description="Directory holding idiom tables and phrase caches")
    model_name: str = Field(default="facebook/nllb-200-distilled-600M")
    device: str = Field(default="cpu")
    precision: str = Field(default="fp32")
    max_length: int = Field(default=256, ge=16, le=1024)
    warmup_iterations: int = Field(default=0, ge=0, le=10)
    speculative_engine: bool = Field(
        default=False,
        description="Run the engine concurrently with the phrase cache lookup",
    )
    engine_failure_policy: EngineFailurePolicy = Field(default=EngineFailurePolicy.FALLBACK)
    preload_model: bool = Field(default=False, description="Load the model during startup")

    @field_validator('engine_failure_policy', mode='before')
    @classmethod
    def normalize_policy(cls, v):
        """Accept policy names in any case"""
        if isinstance(v, str):
            return EngineFailurePolicy(v.lower())
        return v

    def get_data_path(self) -> Path:
        """Get absolute path of the data directory"""
        return Path(self.data_dir).resolve()

    model_config = {"env_prefix": "TRANSLATION_", "protected_namespaces": ()}


class AssemblyAISettings(BaseSettings):
    """Speech-to-text API configuration"""

    api_key: Optional[str] = Field(default=None)
    base_url: str = Field(default="https://api.assemblyai.com")
    poll_interval_seconds: float = Field(default=3.0, ge=0.0, le=60.0)
    max_polls: int = Field(default=20, ge=1, le=200)
    timeout_seconds: int = Field(default=30, ge=1, le=300)

    model_config = {"env_prefix": "ASSEMBLYAI_"}


class OCRSettings(BaseSettings):
    """OCR reader configuration"""

    languages: List[str] = Field(default_factory=lambda: ["en"])
    gpu: bool = Field(default=False)

    @field_validator('languages', mode='before')
    @classmethod
    def parse_languages(cls, v):
        """Parse OCR languages from environment variable or list"""
        if isinstance(v, str):
            return [lang.strip() for lang in v.split(",") if lang.strip()]
        return v or ["en"]

    model_config = {"env_prefix": "OCR_"}


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Chat Translator Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Storage Configuration
    uploads_dir: str = Field(default="uploads/messages")

    # Nested Settings
    translation: TranslationSettings = Field(default_factory=TranslationSettings)
    assemblyai: AssemblyAISettings = Field(default_factory=AssemblyAISettings)
    ocr: OCRSettings = Field(default_factory=OCRSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def get_uploads_path(self) -> Path:
        """Get absolute path for uploaded chat media"""
        return Path(self.uploads_dir).resolve()

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
