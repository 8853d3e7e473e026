# agroquote/config.py

import os

# --- Paths ---
# AGROQUOTE_HOME moves everything; AGROQUOTE_DB_PATH points at a single database file.
BASE_DIR = os.environ.get("AGROQUOTE_HOME", os.path.join(os.path.expanduser("~"), ".agroquote"))
DATA_DIR = os.path.join(BASE_DIR, "data")
DB_NAME = "agroquote.db"
DATABASE_PATH = os.environ.get("AGROQUOTE_DB_PATH", os.path.join(DATA_DIR, DB_NAME))

LOGS_DIR = os.path.join(BASE_DIR, "logs")
LOG_FILE_PATH = os.path.join(LOGS_DIR, "agroquote.log")

# --- Logging ---
CONSOLE_LOG_LEVEL = os.environ.get("AGROQUOTE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'detailed': {'format': LOG_FORMAT, 'datefmt': LOG_DATE_FORMAT},
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'detailed',
            'level': CONSOLE_LOG_LEVEL,
        },
        'rotating_file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'detailed',
            'filename': LOG_FILE_PATH,
            'maxBytes': 2 * 1024 * 1024,
            'backupCount': 3,
            'level': 'DEBUG',
            'encoding': 'utf-8',
        },
    },
    'root': {'handlers': ['console', 'rotating_file'], 'level': 'DEBUG'},
}

# --- Application ---
APP_TITLE = "Sistema de Cotação de Produto Agrícola"
CURRENCY_SYMBOL = "R$"


def ensure_app_dirs():
    """Creates the database and log directories; the file handler needs LOGS_DIR to exist."""
    for directory in (os.path.dirname(DATABASE_PATH), LOGS_DIR):
        if directory:
            os.makedirs(directory, exist_ok=True)
