"""Flask configuration."""

import os


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-prod")

    # Largest number of alternatives or states a request may carry
    MAX_DIMENSION = int(os.environ.get("DECISIONMATRIX_MAX_DIMENSION", "50"))
    MAX_CONTENT_LENGTH = 1024 * 1024


class TestConfig(Config):
    """Testing configuration."""

    TESTING = True
    MAX_DIMENSION = 8
