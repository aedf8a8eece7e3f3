"""Constants for the S3 SSE policy library."""

# Configuration namespace
FS_S3A_PREFIX = "fs.s3a."
FS_S3A_BUCKET_PREFIX = f"{FS_S3A_PREFIX}bucket."
BUCKET_PATTERN = FS_S3A_BUCKET_PREFIX + "{bucket}.{subkey}"

# Encryption options
SERVER_SIDE_ENCRYPTION_ALGORITHM = f"{FS_S3A_PREFIX}server-side-encryption-algorithm"
SERVER_SIDE_ENCRYPTION_KEY = f"{FS_S3A_PREFIX}server-side-encryption.key"
OLD_SERVER_SIDE_ENCRYPTION_KEY = f"{FS_S3A_PREFIX}server-side-encryption-key"

# Connection options
ENDPOINT = f"{FS_S3A_PREFIX}endpoint"
ENDPOINT_REGION = f"{FS_S3A_PREFIX}endpoint.region"
ACCESS_KEY = f"{FS_S3A_PREFIX}access.key"
SECRET_KEY = f"{FS_S3A_PREFIX}secret.key"
SESSION_TOKEN = f"{FS_S3A_PREFIX}session.token"
PATH_STYLE_ACCESS = f"{FS_S3A_PREFIX}path.style.access"
DEFAULT_REGION = "us-east-1"

# Deprecated key -> current key
DEPRECATED_KEYS = {
    OLD_SERVER_SIDE_ENCRYPTION_KEY: SERVER_SIDE_ENCRYPTION_KEY,
}

# Validation error codes
SSE_C_NO_KEY = "SSE_C_NO_KEY"
SSE_S3_WITH_KEY = "SSE_S3_WITH_KEY"
SSE_C_INVALID_KEY = "SSE_C_INVALID_KEY"

SSE_C_NO_KEY_ERROR = (
    f"SSE-C is enabled but no encryption key was declared in {SERVER_SIDE_ENCRYPTION_KEY}"
)
SSE_S3_WITH_KEY_ERROR = (
    f"AES256 is enabled but an encryption key was set in {SERVER_SIDE_ENCRYPTION_KEY}"
)
SSE_C_INVALID_KEY_ERROR = (
    f"SSE-C is enabled but the key in {SERVER_SIDE_ENCRYPTION_KEY} is not valid base64"
)

# Wire format
ENCRYPTION_SECRETS_VERSION = 1208329045511296375
MAX_SECRET_LENGTH = 2048
INCOMPATIBLE_VERSION_ERROR = "Incompatible EncryptionSecrets version"

# S3 request values
SSE_CUSTOMER_ALGORITHM = "AES256"
SSE_KMS_HEADER_VALUE = "aws:kms"
METADATA_DIRECTIVE_COPY = "COPY"
THROTTLE_ERROR_CODES = {"SlowDown", "Throttling", "ThrottlingException", "RequestLimitExceeded"}

# Rendering
NO_ENCRYPTION_TEXT = "(no encryption)"
SERVICE_NAME = "s3-sse-policy"
