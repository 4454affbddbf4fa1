# Hash generation defaults
DEFAULT_HASH_LENGTH = 4
DEFAULT_HASH_ATTEMPTS = 1  # no internal retry on system-hash collisions
MAX_HASH_ATTEMPTS = 5
MAX_HASH_LENGTH = 64  # column/attribute limit for caller-supplied hashes

# Listing
LINKS_PAGE_SIZE = 30

# Store call bounds (seconds)
DEFAULT_ACQUIRE_TIMEOUT = 1
DEFAULT_OPERATION_TIMEOUT = 1

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# AppConfig environment variables
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'
APPCONFIG_AGENT_URL_ENV = 'APPCONFIG_AGENT_URL'
APPCONFIG_PROFILE_NAME_ENV = 'APPCONFIG_PROFILE_NAME'

# LocalStack: endpoint URL environment variable for local development
LOCALSTACK_ENDPOINT_ENV = 'LOCALSTACK_ENDPOINT'

# Headers attached to every API response
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,X-Amz-Date,Authorization,X-Api-Key',
}

# Handler-level options that may sit next to backend settings in AppConfig
HANDLER_OPTIONS = frozenset({'hash_length', 'hash_attempts'})
