from .base import ALLOWED_ORIGINS, LOG_LEVEL, LOGIN_RATE_LIMIT, PORT, _flag, airtable_config, portal_config

AIRTABLE_CONFIG = airtable_config()
PORTAL_CONFIG = portal_config()

DEBUG = _flag("DEBUG", "1")

# Load students at startup and every DIRECTORY_REFRESH_SECONDS
DIRECTORY_AUTO_REFRESH = _flag("DIRECTORY_AUTO_REFRESH", "1")
RATELIMIT_ENABLED = True
