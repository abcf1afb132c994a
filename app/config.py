import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./tasks.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "3600"))
DB_CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "false").lower() in ("1", "true", "yes")

# Storage backend for tasks: "sqlalchemy" or "supabase"
TASK_STORAGE_BACKEND = os.getenv("TASK_STORAGE_BACKEND", "sqlalchemy").lower()

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")

# CORS
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
