import os

from .config import DB_CONFIG, PAY_POLICY, STATUTORY  # noqa: F401

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
