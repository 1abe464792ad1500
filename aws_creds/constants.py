# config file path, relative to the user's home directory
CONFIG_DIR_PARTS = ('.config', 'aws-creds')
STORE_FILE_NAME = 'creds.json'
SETTINGS_FILE_NAME = 'settings.toml'
LOG_FILE_NAME = 'aws-creds.log'

# environment
STORE_PATH_ENV = 'AWS_CREDS_CONFIG'

# profile defaults
RESERVED_PROFILE_NAME = 'default'
DEFAULT_REGION = 'us-east-1'

# the store holds secrets
STORE_FILE_MODE = 0o600

# STS error codes that mean the service, not the caller, is at fault
TRANSIENT_STS_ERROR_CODES = frozenset((
    'Throttling',
    'ThrottlingException',
    'RequestLimitExceeded',
    'ServiceUnavailable',
    'InternalFailure',
    'InternalError',
))
