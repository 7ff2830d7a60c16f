from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_FILE = None

WTF_CSRF_ENABLED = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
