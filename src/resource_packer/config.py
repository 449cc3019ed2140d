# src/resource_packer/config.py
"""Environment-driven settings; a local .env is loaded when present."""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Does not override variables already set in the environment
load_dotenv()


class Config:
    LOG_LEVEL = os.getenv("RESOURCE_PACKER_LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("RESOURCE_PACKER_LOG_FILE", "").strip() or None

    # "1" logs every placement decision at DEBUG
    DEBUG = os.getenv("RESOURCE_PACKER_DEBUG", "0") == "1"

    DEFAULT_PRESET = os.getenv("RESOURCE_PACKER_DEFAULT_PRESET", "standard").strip()
    WEIGHT_TOLERANCE = float(os.getenv("RESOURCE_PACKER_WEIGHT_TOLERANCE", "1e-6"))
