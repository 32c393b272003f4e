"""Shared test fixtures for the App Store Connect MCP server."""
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from asc_core.auth import reset_credentials

TEST_KEY_ID = "TESTKEY123"
TEST_ISSUER_ID = "test-issuer-id"

CREDENTIAL_ENV_VARS = [
    "APP_STORE_CONNECT_KEY_ID",
    "APP_STORE_CONNECT_ISSUER_ID",
    "APP_STORE_CONNECT_P8_PATH",
]


@pytest.fixture(autouse=True)
def _isolate_credentials(monkeypatch: pytest.MonkeyPatch):
    """Start every test without credentials in the environment or the cache."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_credentials()
    yield
    reset_credentials()


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    """A real P-256 key, like the .p8 files App Store Connect hands out."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def p8_key(ec_private_key: ec.EllipticCurvePrivateKey) -> str:
    """PEM (PKCS#8) text of the test private key."""
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(ec_private_key: ec.EllipticCurvePrivateKey) -> str:
    """PEM text of the public half of the test key."""
    return ec_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def p8_path(tmp_path: Path, p8_key: str) -> Path:
    """The test key written to a .p8 file."""
    path = tmp_path / "AuthKey_TESTKEY123.p8"
    path.write_text(p8_key)
    return path


@pytest.fixture
def configured_env(monkeypatch: pytest.MonkeyPatch, p8_path: Path) -> Path:
    """Set all credential environment variables to valid values."""
    monkeypatch.setenv("APP_STORE_CONNECT_KEY_ID", TEST_KEY_ID)
    monkeypatch.setenv("APP_STORE_CONNECT_ISSUER_ID", TEST_ISSUER_ID)
    monkeypatch.setenv("APP_STORE_CONNECT_P8_PATH", str(p8_path))
    return p8_path
