"""
Configuration module for the Feedback Insights backend.
Handles environment variables and application settings.
"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent / '.env'
load_dotenv(dotenv_path=env_path)


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY: str = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG: bool = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING: bool = False

    # Server
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', '5001'))

    # CORS
    CORS_ORIGINS: list = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # OpenAI
    OPENAI_API_KEY: Optional[str] = os.getenv('OPENAI_API_KEY')
    OPENAI_MODEL: str = os.getenv('OPENAI_MODEL', 'gpt-4o')
    OPENAI_TIMEOUT_SECONDS: float = float(os.getenv('OPENAI_TIMEOUT_SECONDS', '60'))

    # Supabase
    SUPABASE_URL: Optional[str] = os.getenv('SUPABASE_URL')
    SUPABASE_KEY: Optional[str] = os.getenv('SUPABASE_KEY')
    SUPABASE_REPORTS_TABLE: str = os.getenv('SUPABASE_REPORTS_TABLE', 'reports')

    # Report storage backend: 'supabase' or 'memory'
    REPORT_STORE: str = os.getenv('REPORT_STORE', 'supabase').lower()

    # Rate Limiting (fixed window per caller address)
    RATE_LIMIT_COUNT: int = int(os.getenv('RATE_LIMIT_COUNT', '10'))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', '60'))
    RATE_LIMIT_STORAGE_URI: str = os.getenv('RATE_LIMIT_STORAGE_URI', 'memory://')

    # Word ceiling shown and enforced by the submission form
    MAX_WORDS: int = int(os.getenv('MAX_WORDS', '2500'))

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE: Optional[str] = os.getenv('LOG_FILE')

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required configuration is present."""
        required_vars = ['OPENAI_API_KEY']
        if cls.REPORT_STORE == 'supabase':
            required_vars += ['SUPABASE_URL', 'SUPABASE_KEY']

        missing = [var for var in required_vars if not getattr(cls, var, None)]

        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        if cls.REPORT_STORE not in ('supabase', 'memory'):
            raise ValueError(f"Unknown REPORT_STORE '{cls.REPORT_STORE}' (expected 'supabase' or 'memory')")

        return True


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False

    @classmethod
    def validate(cls) -> bool:
        """Stricter validation for production."""
        if not cls.SECRET_KEY or cls.SECRET_KEY == 'dev-secret-key-change-in-production':
            raise ValueError("SECRET_KEY must be set in production")
        if cls.REPORT_STORE != 'supabase':
            raise ValueError("REPORT_STORE must be 'supabase' in production")
        return super().validate()


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    OPENAI_API_KEY = 'test-key'
    REPORT_STORE = 'memory'
    RATE_LIMIT_STORAGE_URI = 'memory://'
    LOG_FILE = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
