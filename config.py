import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./cashbook.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Cashbook mutations: mutation + recalculation must finish within this bound
    CASHBOOK_MUTATION_TIMEOUT_SECONDS = data.get("CASHBOOK_MUTATION_TIMEOUT_SECONDS", 30)

    # Calculation Verification Worker
    VERIFICATION_ENABLED = bool(data.get("VERIFICATION_ENABLED", True))
    VERIFICATION_INTERVAL_SECONDS = data.get("VERIFICATION_INTERVAL_SECONDS", 86400)  # Daily
    VERIFICATION_NOTIFICATION_WEBHOOK = data.get("VERIFICATION_NOTIFICATION_WEBHOOK", None)

    # Archive reports
    BUSINESS_NAME = data.get("BUSINESS_NAME", "Printing House")
