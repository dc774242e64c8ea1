import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DATABASE_URL = os.getenv("COURSEWORK_DATABASE_URL", f"sqlite:///{BASE_DIR}/coursework.db")

# Tokens are issued by the identity service; we only verify them.
SECRET_KEY = os.getenv("COURSEWORK_SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(minutes=60)

LOG_LEVEL = os.getenv("COURSEWORK_LOG_LEVEL", "INFO")

# Late policy
ACCEPT_LATE_SUBMISSIONS = os.getenv("COURSEWORK_ACCEPT_LATE", "true").lower() in ("1", "true", "yes")
LATE_GRACE_PERIOD_MINUTES = int(os.getenv("COURSEWORK_LATE_GRACE_MINUTES", "0"))  # only used when rejecting
