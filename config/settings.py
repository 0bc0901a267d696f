"""
SPS – Django Settings (Infrastructure Only)
============================================
Django serves as the framework container for SPS.
Storage policy behavior lives in sps/; Django hosts the ORM and HTTP glue.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("SPS_SECRET_KEY", "sps-dev-key-replace-before-deployment")

DEBUG = os.environ.get("SPS_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host for host in os.environ.get("SPS_ALLOWED_HOSTS", "").split(",") if host
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── SPS Modules ───────────────────────────────────────
    "sps.policy_store",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("SPS_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Storage Policies ──────────────────────────────────────────
# Configuration node holding one property per classification key.
STORAGE_POLICY_NODE_PATH = "/fedora:system/fedora:storage_policy"
# "db" persists through sps.policy_store; "memory" is process-local.
STORAGE_POLICY_STORE = os.environ.get("SPS_STORAGE_POLICY_STORE", "db")
# None → built-in repository node types.
STORAGE_POLICY_CLASSIFICATIONS = None

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "sps": {
            "handlers": ["console"],
            "level": os.environ.get("SPS_LOG_LEVEL", "INFO"),
        },
    },
}
