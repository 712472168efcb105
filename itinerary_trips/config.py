"""Configuration: .env loading, paths, constants."""

import os
from datetime import timedelta
from pathlib import Path
from dotenv import load_dotenv

# Project root = parent of itinerary_trips/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# --- Run context ---
BASED_CITY = os.getenv("BASED_CITY", "")
TIME_ZONE = os.getenv("TIME_ZONE") or None  # overrides the zone inferred from BASED_CITY
DEFAULT_TIME_ZONE = "UTC"

# --- Paths ---
INPUT_PATH = os.getenv("INPUT_PATH", str(PROJECT_ROOT / "input.txt"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# --- Assembly ---
CONNECTION_WINDOW = timedelta(hours=24)  # strict: a gap of exactly 24h is not a connection
