import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "factory_ledger"),
}

OWNER_EMAIL = os.getenv("OWNER_EMAIL", "")
OWNER_PASSWORD = os.getenv("OWNER_PASSWORD", "")

BLOB_DIR = os.getenv("BLOB_DIR", "/var/lib/factory-ledger/blobs")
BLOB_BASE_URL = os.getenv("BLOB_BASE_URL", "/media")
PHOTO_MAX_SIZE = int(os.getenv("PHOTO_MAX_SIZE", "1024"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
