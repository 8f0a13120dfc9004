from .base import ALLOWED_ORIGINS, LOG_LEVEL, LOGIN_RATE_LIMIT, PORT, _flag, airtable_config, portal_config

AIRTABLE_CONFIG = airtable_config()
PORTAL_CONFIG = portal_config()

DEBUG = False

DIRECTORY_AUTO_REFRESH = _flag("DIRECTORY_AUTO_REFRESH", "1")
RATELIMIT_ENABLED = True
