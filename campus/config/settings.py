"""Configuration settings - Configuration Layer (Environment Separated)"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

ROOT_DIR = Path(__file__).resolve().parent.parent.parent
LOCAL_CONFIG_PATH = os.path.join(ROOT_DIR, "local_config.json")


def safe_int_env(key: str, default: str) -> int:
    """Safely convert environment variable to int"""
    try:
        return int(os.getenv(key, default))
    except ValueError:
        return int(default)


def safe_bool_env(key: str, default: str) -> bool:
    """Read a true/false style environment variable"""
    return os.getenv(key, default).strip().lower() in ("1", "true", "yes", "on")


def load_local_config(path: str = LOCAL_CONFIG_PATH) -> Dict[str, Any]:
    """Load local_config.json if present, an empty dict otherwise"""
    try:
        with open(path, "r") as config_file:
            return json.load(config_file)
    except FileNotFoundError:
        return {}


# Pagination (Business Configuration)
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 50  # hard ceiling, never taken from requests or env

# Student / Course constraints (Business Configuration)
MIN_STUDENT_AGE = 16
MIN_COURSE_CREDITS = 1
MAX_COURSE_CREDITS = 6
MIN_PASSWORD_LENGTH = 6

# Identity store backends
IDENTITY_BACKENDS = {"memory", "mongo"}


def build_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Resolve the application configuration.

    Precedence: explicit overrides, then environment variables, then
    local_config.json, then built-in defaults.
    """
    local = load_local_config()
    mongo_config = local.get("MONGO_CONFIG", {})

    config = {
        "DB_URL": os.getenv("DB_URL", mongo_config.get("url", "mongodb://127.0.0.1:27017")),
        "DB_NAME": os.getenv("DB_NAME", mongo_config.get("db_name", "graphql-lab-day2")),
        "STUDENTS_COLLECTION": mongo_config.get("students_collection", "students"),
        "COURSES_COLLECTION": mongo_config.get("courses_collection", "courses"),
        "USERS_COLLECTION": mongo_config.get("users_collection", "users"),
        "MONGO_USE_TRANSACTIONS": safe_bool_env("MONGO_USE_TRANSACTIONS", "false"),
        "JWT_SECRET_KEY": os.getenv("JWT_SECRET_KEY", os.getenv("SECRET_KEY", "your-secret-key-change-in-production")),
        "JWT_ACCESS_TOKEN_EXPIRES_DAYS": safe_int_env("JWT_ACCESS_TOKEN_EXPIRES_DAYS", "7"),
        "IDENTITY_BACKEND": os.getenv("IDENTITY_BACKEND", "memory").strip().lower(),
        "BCRYPT_ROUNDS": safe_int_env("BCRYPT_ROUNDS", "10"),
        "PORT": safe_int_env("PORT", "4000"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "LOG_DIR": os.getenv("LOG_DIR", os.path.join(ROOT_DIR, "logs")),
        "LOG_TO_FILE": safe_bool_env("LOG_TO_FILE", "true"),
    }

    if overrides:
        config.update(overrides)

    if config["IDENTITY_BACKEND"] not in IDENTITY_BACKENDS:
        raise ValueError(
            f"Invalid IDENTITY_BACKEND '{config['IDENTITY_BACKEND']}'. "
            f"Allowed: {', '.join(sorted(IDENTITY_BACKENDS))}"
        )

    return config
