import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Document store
DB_PATH = Path(os.getenv("TASKDECK_DB_PATH", "data/db.json"))

# Completion stats retention window (days)
STATS_RETENTION_DAYS = int(os.getenv("TASKDECK_STATS_RETENTION_DAYS", "90"))

# Logging
LOG_LEVEL = os.getenv("TASKDECK_LOG_LEVEL", "INFO").upper()

# CORS
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("TASKDECK_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
