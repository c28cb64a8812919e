import logging
import os
from dotenv import load_dotenv

load_dotenv()

GOOGLE_APPLICATION_CREDENTIALS = os.getenv('GOOGLE_APPLICATION_CREDENTIALS')
SERVICE_ACCOUNT_PATH = os.getenv('SERVICE_ACCOUNT_PATH', 'serviceAccountKey.json')

TENANT_ID = os.getenv('SAMS_TENANT_ID', 'MTC')

INSPECT_UID = os.getenv('SAMS_INSPECT_UID')
INSPECT_EMAIL = os.getenv('SAMS_INSPECT_EMAIL')

MIGRATE_UID = os.getenv('SAMS_MIGRATE_UID')
MIGRATE_EMAIL = os.getenv('SAMS_MIGRATE_EMAIL')

LOG_LEVEL = os.getenv('SAMS_LOG_LEVEL', 'INFO')


class ConfigError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def require(value, name):
    """Return value, or raise ConfigError naming the missing setting."""
    if not value:
        raise ConfigError(f"{name} is not set (pass it as a flag or in .env)")
    return value


def configure_logging(level=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


# Validate essential config
if not GOOGLE_APPLICATION_CREDENTIALS and not os.path.exists(SERVICE_ACCOUNT_PATH):
    print("Warning: GOOGLE_APPLICATION_CREDENTIALS is not set and no service account file was found. "
          "Falling back to Application Default Credentials.")
