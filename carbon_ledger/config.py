"""
config.py
Application settings, read from the environment (and a local .env file).
The engines in carbon_ledger.core take no configuration.
"""

import os

from dotenv import load_dotenv

load_dotenv()

SERVICE_NAME = os.getenv("SERVICE_NAME", "Carbon Ledger Engine")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
