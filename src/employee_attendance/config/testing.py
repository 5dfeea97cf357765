import os

from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

# Never reach real services from the test suite
WORLD_TIME_API_URL = os.getenv("WORLD_TIME_API_URL", "http://127.0.0.1:9/time")
HOLIDAY_API_KEY = ""

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
