"""Application settings"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).parent.parent

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{BASE_DIR / 'data' / 'discovery.db'}"
)

# memory / file / sql
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").strip().lower()
DATA_FILE = Path(os.getenv("DATA_FILE", str(BASE_DIR / "data" / "db.json")))

DEFAULT_MAX_DISTANCE_MILES = float(os.getenv("DEFAULT_MAX_DISTANCE_MILES", "5"))

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
