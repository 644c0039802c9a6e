# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv
from datetime import timedelta


BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_spectacular",

    # Domain apps
    "ho_core.officers.apps.OfficersConfig",
    "ho_core.reports.apps.ReportsConfig",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "ho_core.common.middleware.RequestIdMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]


ROOT_URLCONF = "config.urls"

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
    }
]

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "house_officers"),
        "USER": os.getenv("DB_USER", "ho"),
        "PASSWORD": os.getenv("DB_PASSWORD", "ho"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

# The local officer cache lives in its own cache alias so clearing the
# default cache never drops the fallback copy of the record set.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
    "officers_local": {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": os.getenv("OFFICERS_LOCAL_CACHE_DIR", str(BASE_DIR / ".officers_cache")),
        "TIMEOUT": None,
    },
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Africa/Lagos"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",

    # Standard error envelope
    "EXCEPTION_HANDLER": "ho_core.common.api.exceptions.api_exception_handler",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "House Officers Clinical Flow API",
    "DESCRIPTION": "Rotation tracking for house officers: records, dashboards, timelines, reports",
    "VERSION": "0.1.0",

    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": True,
    "SORT_OPERATION_PARAMETERS": True,

    # Remove legacy /api/* endpoints, keep /api/v1/*
    "PREPROCESSING_HOOKS": [
        "ho_core.common.spectacular_hooks.preprocess_exclude_legacy_api",
    ],
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=30),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=14),
    "ROTATE_REFRESH_TOKENS": True,
    "BLACKLIST_AFTER_ROTATION": False,
    "UPDATE_LAST_LOGIN": True,
}

# CORS settings
# Development
CORS_ALLOW_ALL_ORIGINS = True  # Only for development!
CORS_ALLOW_CREDENTIALS = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
    },
}

# -------------------------------------------------------------------
# House officers
# -------------------------------------------------------------------

# "orm" keeps the durable copy in DATABASES[OFFICERS_REMOTE_DB_ALIAS];
# "postgrest" talks to a Supabase/PostgREST table over HTTP.
OFFICERS_REMOTE_BACKEND = os.getenv("OFFICERS_REMOTE_BACKEND", "orm")
OFFICERS_REMOTE_DB_ALIAS = os.getenv("OFFICERS_REMOTE_DB_ALIAS", "default")
OFFICERS_REMOTE_URL = os.getenv("SUPABASE_URL", "")
OFFICERS_REMOTE_KEY = os.getenv("SUPABASE_ANON_KEY", "")
OFFICERS_REMOTE_TABLE = "house_officers"
OFFICERS_REMOTE_TIMEOUT = float(os.getenv("OFFICERS_REMOTE_TIMEOUT", "10"))

OFFICERS_LOCAL_CACHE_ALIAS = "officers_local"

# None -> ho_core.officers.constants.PRIORITY_UNITS
OFFICERS_PRIORITY_UNITS = None

OFFICERS_CALENDAR_LOCATION = "FMC Umuahia, Department of Internal Medicine"

OFFICERS_REPORT_HEADER = (
    "FMC UMUAHIA, ABIA STATE",
    "DEPARTMENT OF INTERNAL MEDICINE",
    "HOUSE OFFICERS CLINICAL FLOW",
)
OFFICERS_REPORT_ATTRIBUTION = "Built by Dr. Onyemachi Joseph, copyright 2025"

# Optional explicit path to the wkhtmltopdf binary used by pdfkit.
WKHTMLTOPDF_CMD = os.getenv("WKHTMLTOPDF_CMD", "")
