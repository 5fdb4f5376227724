# clido/settings.py
import os
import sys
from pathlib import Path


def get_db_path() -> Path:
    """Lokalizacja pliku bazy: CLIDO_DB_PATH albo katalog danych użytkownika."""
    override = os.environ.get("CLIDO_DB_PATH")
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        base = Path(app_data) if app_data else Path.home() / "AppData" / "Roaming"
    else:
        base = Path.home() / ".local" / "share"
    return base / "clido" / "data.db"


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = "clido-local-cli"  # brak warstwy HTTP, klucz nie podpisuje niczego
DEBUG = False

INSTALLED_APPS = [
    'django_filters',
    'apps.core',
    'apps.projects',
    'apps.tasks',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': get_db_path(),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Daty naiwne w czasie lokalnym; None = strefa systemowa.
USE_TZ = False
TIME_ZONE = os.environ.get("CLIDO_TIME_ZONE") or None
USE_I18N = False

LOG_LEVEL = os.environ.get("CLIDO_LOG_LEVEL", "WARNING").upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '[%(name)s] %(levelname)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'apps': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'clido': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}
