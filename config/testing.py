import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "folha_escolar_test"),
    "connect_timeout": 2,
    "statement_timeout": 5,
}

ADMIN_PASSWORD = "senha-admin"
ADMIN_PASSWORD_HASH = None
JWT_SECRET = "test-jwt-secret"
TOKEN_EXPIRE_HOURS = 12

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
