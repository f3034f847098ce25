import os
import sys
from pathlib import Path

# Default env for app settings in tests.
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("FETCH_TIMEOUT", "2000")
os.environ.setdefault("MAX_FILE_SIZE", "1048576")

# Ensure the repo root is on sys.path so "import mimetype_api" works without an install.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
