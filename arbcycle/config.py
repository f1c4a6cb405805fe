# arbcycle/config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

SNAPSHOT_PATH = Path(os.getenv("SNAPSHOT_PATH", "data/snapshot.json"))

# ---- Detection ---------------------------------------------------------------
MIN_PROFIT_THRESHOLD = float(os.getenv("MIN_PROFIT_THRESHOLD", "0.001"))   # 0.1%
SEARCH_WORKERS       = int(os.getenv("SEARCH_WORKERS", 1))
MULTI_SOURCE         = os.getenv("MULTI_SOURCE", "False").lower() == "true"

_budget = os.getenv("SEARCH_TIME_BUDGET")
SEARCH_TIME_BUDGET = float(_budget) if _budget else None                    # seconds

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
