# autoflow/settings.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

# A chave real vem do ambiente; o valor padrão serve apenas para desenvolvimento.
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-autoflow-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") not in ("0", "false", "False")
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "vehicles",
    "leads",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "autoflow.urls"
WSGI_APPLICATION = "autoflow.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# Banco de arquivo único (SQLite).
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("AUTOFLOW_DB_PATH", str(BASE_DIR / "autoflow.db")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "es"
TIME_ZONE = "Europe/Madrid"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

# -----------------------------
# Uploads de imagens de veículos
# -----------------------------
MEDIA_ROOT = os.getenv("AUTOFLOW_MEDIA_ROOT", str(BASE_DIR / "public" / "uploads"))
MEDIA_URL = "/uploads/"

VEHICLE_UPLOAD_SUBDIR = "vehicles"
VEHICLE_IMAGE_MAX_BYTES = 5 * 1024 * 1024
VEHICLE_IMAGE_CONTENT_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/avif",
)
VEHICLE_PLACEHOLDER_IMAGE = "/placeholder-car.svg"

# Uploads maiores que isso vão para arquivo temporário em disco.
FILE_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = 32 * 1024 * 1024

# Cache das views de leitura (inventário, relatórios); invalidado a cada mutação.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "autoflow",
    }
}

LOG_LEVEL = os.getenv("AUTOFLOW_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[{asctime}] {levelname:8} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "vehicles": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "leads": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "autoflow": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
