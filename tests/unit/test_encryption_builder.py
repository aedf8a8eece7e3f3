"""Tests for encryption policy resolution."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from prometheus_client import REGISTRY

from s3_sse_policy.builders.encryption import (
    create_encryption_secrets,
    get_encryption_algorithm,
    get_server_side_encryption_key,
    resolve_encryption_method,
    validate_encryption_method,
)
from s3_sse_policy.config import Configuration
from s3_sse_policy.constants import (
    SERVER_SIDE_ENCRYPTION_ALGORITHM,
    SERVER_SIDE_ENCRYPTION_KEY,
    SSE_C_INVALID_KEY,
    SSE_C_NO_KEY,
    SSE_S3_WITH_KEY,
)
from s3_sse_policy.services.encryption.methods import EncryptionMethod
from s3_sse_policy.services.encryption.secrets import EncryptionSecrets
from s3_sse_policy.utils.errors import EncryptionValidationError, ErrorKind, SecretLookupError


def _conf(algorithm: str | None = None, key: str | None = None) -> Configuration:
    values = {}
    if algorithm is not None:
        values[SERVER_SIDE_ENCRYPTION_ALGORITHM] = algorithm
    if key is not None:
        values[SERVER_SIDE_ENCRYPTION_KEY] = key
    return Configuration(values)


class TestResolveEncryptionMethod:
    """Test cases for resolve_encryption_method function."""

    def test_sse_c_without_key_rejected(self):
        """Test SSE-C with no key fails."""
        with pytest.raises(EncryptionValidationError) as exc_info:
            resolve_encryption_method("data", _conf("SSE-C", ""))
        assert exc_info.value.code == SSE_C_NO_KEY
        assert exc_info.value.kind is ErrorKind.VALIDATION

    def test_sse_c_with_blank_key_rejected(self):
        """Test SSE-C with a whitespace key fails."""
        with pytest.raises(EncryptionValidationError) as exc_info:
            validate_encryption_method(EncryptionMethod.SSE_C, "   ")
        assert exc_info.value.code == SSE_C_NO_KEY

    def test_sse_c_with_key_accepted(self):
        """Test SSE-C with a key resolves."""
        method, diagnostics = resolve_encryption_method("data", _conf("SSE-C", "YWJjMTIz"))
        assert method is EncryptionMethod.SSE_C
        assert diagnostics == "key of length 8 ending with z"

    def test_sse_c_with_invalid_base64_rejected(self):
        """Test SSE-C with a key that is not base64 fails at resolution."""
        with pytest.raises(EncryptionValidationError) as exc_info:
            resolve_encryption_method("data", _conf("SSE-C", "abc123"))
        assert exc_info.value.code == SSE_C_INVALID_KEY
        assert "abc123" not in str(exc_info.value)
        assert "key of length 6 ending with 3" in str(exc_info.value)

    @pytest.mark.parametrize("algorithm", ["SSE-S3", "AES256"])
    def test_sse_s3_with_key_rejected(self, algorithm):
        """Test SSE-S3 with a key fails and redacts the key."""
        with pytest.raises(EncryptionValidationError) as exc_info:
            resolve_encryption_method("data", _conf(algorithm, "nonempty"))
        assert exc_info.value.code == SSE_S3_WITH_KEY
        assert "key of length 8 ending with y" in str(exc_info.value)
        assert "nonempty" not in str(exc_info.value)

    def test_sse_s3_without_key_accepted(self):
        """Test SSE-S3 with no key resolves."""
        method, diagnostics = resolve_encryption_method("data", _conf("AES256"))
        assert method is EncryptionMethod.SSE_S3
        assert diagnostics == "empty key"

    @pytest.mark.parametrize("key", ["", "x", "arn:aws:kms:us-east-1:123456789012:key/k"])
    def test_sse_kms_accepts_any_key(self, key):
        """Test SSE-KMS with or without a key resolves."""
        method, _ = resolve_encryption_method("data", _conf("SSE-KMS", key))
        assert method is EncryptionMethod.SSE_KMS

    def test_no_encryption(self):
        """Test empty algorithm and key resolve to NONE."""
        method, diagnostics = resolve_encryption_method("data", _conf("", ""))
        assert method is EncryptionMethod.NONE
        assert diagnostics == "empty key"

    def test_unknown_algorithm_is_none(self):
        """Test an unrecognized algorithm resolves to NONE."""
        assert get_encryption_algorithm("data", _conf("ROT13")) is EncryptionMethod.NONE

    def test_bucket_override_applies(self):
        """Test per-bucket algorithm overrides the global one."""
        conf = Configuration({
            SERVER_SIDE_ENCRYPTION_ALGORITHM: "AES256",
            "fs.s3a.bucket.secure.server-side-encryption-algorithm": "SSE-C",
            "fs.s3a.bucket.secure.server-side-encryption.key": "c2VjcmV0",
        })
        assert get_encryption_algorithm("secure", conf) is EncryptionMethod.SSE_C
        assert get_encryption_algorithm("plain", conf) is EncryptionMethod.SSE_S3

    def test_algorithm_lookup_failure_propagates(self):
        """Test store failures reading the algorithm are not swallowed."""
        provider = Mock()
        provider.get_credential_entry.side_effect = OSError("unreadable")
        conf = Configuration(credential_providers=[provider])

        with pytest.raises(SecretLookupError):
            resolve_encryption_method("", conf)

    def test_invalid_resolution_counted(self):
        """Test invalid combinations are counted."""
        labels = {"method": "SSE_C", "result": "invalid"}
        before = REGISTRY.get_sample_value("s3_sse_policy_encryption_resolutions_total", labels) or 0.0

        with pytest.raises(EncryptionValidationError):
            resolve_encryption_method("", _conf("SSE-C"))

        after = REGISTRY.get_sample_value("s3_sse_policy_encryption_resolutions_total", labels)
        assert after == before + 1


class TestGetServerSideEncryptionKey:
    """Test cases for the lenient key lookup."""

    def test_key_returned(self):
        """Test reading the key."""
        assert get_server_side_encryption_key("data", _conf(key="k1")) == "k1"

    def test_deprecated_key_name(self):
        """Test the deprecated key name is honoured."""
        conf = Configuration({"fs.s3a.server-side-encryption-key": "old"})
        assert get_server_side_encryption_key("data", conf) == "old"

    def test_store_failure_swallowed(self, caplog):
        """Test store failures are logged and replaced with an empty key."""
        provider = Mock()
        provider.get_credential_entry.side_effect = OSError("unreadable")
        conf = Configuration({SERVER_SIDE_ENCRYPTION_KEY: "plain"}, credential_providers=[provider])
        labels = {"key": SERVER_SIDE_ENCRYPTION_KEY}
        before = REGISTRY.get_sample_value("s3_sse_policy_secret_lookup_failures_total", labels) or 0.0

        with caplog.at_level("ERROR"):
            assert get_server_side_encryption_key("data", conf) == ""

        assert f"Cannot retrieve {SERVER_SIDE_ENCRYPTION_KEY}" in caplog.text
        after = REGISTRY.get_sample_value("s3_sse_policy_secret_lookup_failures_total", labels)
        assert after == before + 1

    def test_sse_c_fails_when_key_store_unreadable(self):
        """Test a swallowed key failure still fails SSE-C validation."""
        def entry(alias):
            if "encryption.key" in alias or "encryption-key" in alias:
                raise OSError("unreadable")
            return None

        provider = Mock()
        provider.get_credential_entry.side_effect = entry
        conf = Configuration({SERVER_SIDE_ENCRYPTION_ALGORITHM: "SSE-C"}, credential_providers=[provider])

        with pytest.raises(EncryptionValidationError) as exc_info:
            resolve_encryption_method("data", conf)
        assert exc_info.value.code == SSE_C_NO_KEY


class TestCreateEncryptionSecrets:
    """Test cases for create_encryption_secrets function."""

    def test_create_kms_secrets(self):
        """Test building SSE-KMS secrets."""
        secrets = create_encryption_secrets("data", _conf("SSE-KMS", "arn:kms:2"))
        assert secrets == EncryptionSecrets("SSE-KMS", "arn:kms:2")
        assert secrets.method is EncryptionMethod.SSE_KMS

    def test_create_uses_canonical_algorithm(self):
        """Test the alias SSE-S3 is stored under its canonical name."""
        secrets = create_encryption_secrets("data", _conf("SSE-S3"))
        assert secrets.algorithm == "AES256"
        assert secrets.method is EncryptionMethod.SSE_S3

    def test_create_unencrypted(self):
        """Test building secrets without encryption."""
        secrets = create_encryption_secrets("data", Configuration())
        assert secrets.method is EncryptionMethod.NONE
        assert not secrets.has_algorithm()
        assert not secrets.has_key()

    def test_create_invalid_raises(self):
        """Test inconsistent configuration fails fast."""
        with pytest.raises(EncryptionValidationError):
            create_encryption_secrets("data", _conf("AES256", "oops"))

    def test_key_read_once(self):
        """Test the secrets carry the key that was validated."""
        key_reads = []

        def entry(alias):
            if "encryption.key" not in alias and "encryption-key" not in alias:
                return None
            key_reads.append(alias)
            if len(key_reads) > 1:
                raise OSError("store went away")
            return "a2V5"

        provider = Mock()
        provider.get_credential_entry.side_effect = entry
        conf = Configuration({SERVER_SIDE_ENCRYPTION_ALGORITHM: "SSE-C"}, credential_providers=[provider])

        secrets = create_encryption_secrets("data", conf)

        assert len(key_reads) == 1
        assert secrets.method is EncryptionMethod.SSE_C
        assert secrets.key == "a2V5"
