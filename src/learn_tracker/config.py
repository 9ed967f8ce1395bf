"""Runtime settings read from the environment."""
import os
from pathlib import Path

DEFAULT_DB_PATH = os.environ.get(
    "LEARN_TRACKER_DB", str(Path.home() / ".learn_tracker" / "tracker.db")
)
DEBUG = bool(os.environ.get("LEARN_TRACKER_DEBUG"))
