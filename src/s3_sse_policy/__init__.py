"""Server-side encryption policy for S3 copy and rename operations."""

from .builders.encryption import (
    create_encryption_secrets,
    get_encryption_algorithm,
    get_server_side_encryption_key,
    resolve_encryption_method,
)
from .config import Configuration, CredentialProvider
from .filesystem import EncryptingS3FileSystem, create_filesystem
from .handlers.copy import apply_copy_encryption_parameters, select_copy_encryption_parameters
from .services.aws.models import (
    CopyEncryptionParameters,
    CopyObjectRequest,
    SourceObjectMetadata,
    SSEAwsKeyManagementParams,
    SSECustomerKey,
)
from .services.encryption.methods import EncryptionMethod
from .services.encryption.secrets import EncryptionSecrets
from .utils.errors import (
    ConfigurationError,
    EncryptionPolicyError,
    EncryptionValidationError,
    ErrorKind,
    SecretLookupError,
    SerializationError,
    SerializationVersionMismatch,
)
from .utils.lookup import lookup_password

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigurationError",
    "CopyEncryptionParameters",
    "CopyObjectRequest",
    "CredentialProvider",
    "EncryptingS3FileSystem",
    "EncryptionMethod",
    "EncryptionPolicyError",
    "EncryptionSecrets",
    "EncryptionValidationError",
    "ErrorKind",
    "SSEAwsKeyManagementParams",
    "SSECustomerKey",
    "SecretLookupError",
    "SerializationError",
    "SerializationVersionMismatch",
    "SourceObjectMetadata",
    "apply_copy_encryption_parameters",
    "create_encryption_secrets",
    "create_filesystem",
    "get_encryption_algorithm",
    "get_server_side_encryption_key",
    "lookup_password",
    "resolve_encryption_method",
    "select_copy_encryption_parameters",
]
