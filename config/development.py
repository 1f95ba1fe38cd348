import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "factory_ledger"),
}

# Owner credential is provisioned out of band (.env or the process environment).
OWNER_EMAIL = os.getenv("OWNER_EMAIL", "")
OWNER_PASSWORD = os.getenv("OWNER_PASSWORD", "")

BLOB_DIR = os.getenv("BLOB_DIR", "var/blobs")
BLOB_BASE_URL = os.getenv("BLOB_BASE_URL", "/media")
PHOTO_MAX_SIZE = int(os.getenv("PHOTO_MAX_SIZE", "1024"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
