"""Configuration via environment variables."""

import os
from pathlib import Path

# Report archive roots per environment
DEV_BASE_DIR = os.environ.get("CUKE_DEV_DIR", "C:/Dev-Ruby/TestReports/PRAPay-UK/")
PROD_BASE_DIR = os.environ.get("CUKE_PROD_DIR", "//TestReports/PRAPay-UK/")
ARCHIVE_DIR = "archive"

ENVIRONMENTS = ["dev", "prod"]

# Default CLI options
DEFAULT_ENV = os.environ.get("CUKE_ENV", "dev")
DEFAULT_FORMAT = os.environ.get("CUKE_FORMAT", "text")

# Log level used when --debug is not given
LOG_LEVEL = os.environ.get("CUKE_LOG_LEVEL", "WARNING").upper()


def get_base_dir(environment: str = "dev") -> str:
    """Archive root for the given environment, dev unless 'prod'."""
    if environment.lower() == "prod":
        return PROD_BASE_DIR
    return DEV_BASE_DIR


def get_archive_path(environment: str = "dev") -> Path:
    return Path(get_base_dir(environment)) / ARCHIVE_DIR
