from .base import LOG_LEVEL, PORT, airtable_config, portal_config

AIRTABLE_CONFIG = airtable_config()
AIRTABLE_CONFIG.update({"api_key": "test-key", "base_id": "appTEST", "max_retries": 0, "retry_backoff": 0.0})

PORTAL_CONFIG = portal_config()
PORTAL_CONFIG.update({"pw_secret": "test-secret", "master_password": "test-master"})

ALLOWED_ORIGINS = ""
LOGIN_RATE_LIMIT = "1000 per minute"

DEBUG = False
TESTING = True

DIRECTORY_AUTO_REFRESH = False
RATELIMIT_ENABLED = False
