"""
Configuration settings for the form encoder and its HTTP client.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base directory
BASE_DIR = Path(__file__).parent

# Values in a local .env file override the defaults below
load_dotenv(BASE_DIR / ".env")

# Tag read from dataclass field metadata, similar to the json tag
TAG_NAME = os.getenv("FORM_TAG_NAME", "form")

# Tag value that drops a field, similar to "-" for json
IGNORE_FLAG = os.getenv("FORM_IGNORE_FLAG", "-")

# Target service for FormClient
BASE_URL = os.getenv("FORM_BASE_URL", "http://localhost:8000")
USER_AGENT = "Form-Encoder/1.0"

# Retries and timeouts
MAX_RETRIES = int(os.getenv("FORM_MAX_RETRIES", "5"))
RETRY_DELAY = 1  # seconds
MAX_RETRY_DELAY = 60  # seconds
CONNECT_TIMEOUT = 10  # seconds for connection establishment
READ_TIMEOUT = 60  # seconds for reading response

# Status codes worth retrying: rate limit and server errors
RETRYABLE_STATUS_CODES = [429, 500, 502, 503, 504]

# CLI log file
LOG_FILE = os.getenv("FORM_LOG_FILE", "form_encoder.log")
