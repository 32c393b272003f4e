"""App Store Connect API authentication.

App Store Connect accepts ES256-signed JWTs minted from an API key: a key ID,
the team's issuer ID and the downloaded ``.p8`` private key. Credentials are
loaded once per process; tokens are minted fresh for every request so that
none is ever sent close to its expiry.
"""
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from .config import ISSUER_ID_ENV, KEY_ID_ENV, P8_PATH_ENV, get_settings
from .errors import ConfigurationError, FileAccessError, KeyFormatError

TOKEN_AUDIENCE = "appstoreconnect-v1"
TOKEN_ALGORITHM = "ES256"
TOKEN_LIFETIME_SECONDS = 20 * 60  # Apple rejects tokens valid for longer

REQUIRED_ENV_VARS = [KEY_ID_ENV, ISSUER_ID_ENV, P8_PATH_ENV]


@dataclass(frozen=True)
class Credentials:
    """API key material used to sign tokens."""

    key_id: str
    issuer_id: str
    private_key: str  # PEM text


_credentials: Optional[Credentials] = None
_credentials_lock = threading.Lock()


def load_credentials() -> Credentials:
    """Load the API key credentials, caching them for the process lifetime.

    Raises:
        ConfigurationError: a required environment variable is missing or empty
        FileAccessError: the .p8 key file cannot be read
        KeyFormatError: the key file does not hold an EC private key
    """
    global _credentials

    if _credentials is not None:
        return _credentials

    with _credentials_lock:
        if _credentials is None:
            _credentials = _read_credentials()
    return _credentials


def _read_credentials() -> Credentials:
    settings = get_settings()
    values = {
        KEY_ID_ENV: settings.key_id.strip(),
        ISSUER_ID_ENV: settings.issuer_id.strip(),
        P8_PATH_ENV: settings.p8_path.strip(),
    }
    missing = [name for name in REQUIRED_ENV_VARS if not values[name]]
    if missing:
        raise ConfigurationError(missing, REQUIRED_ENV_VARS)

    key_path = Path(values[P8_PATH_ENV]).expanduser()
    try:
        private_key = key_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(key_path), str(e)) from e

    try:
        key = load_pem_private_key(private_key.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyFormatError(str(key_path), str(e)) from e
    if not isinstance(key, EllipticCurvePrivateKey):
        raise KeyFormatError(str(key_path), "expected an elliptic-curve (P-256) private key")

    return Credentials(
        key_id=values[KEY_ID_ENV],
        issuer_id=values[ISSUER_ID_ENV],
        private_key=private_key,
    )


def reset_credentials() -> None:
    """Forget cached credentials and settings so the next load re-reads them."""
    global _credentials

    with _credentials_lock:
        _credentials = None
    get_settings.cache_clear()


def generate_token() -> str:
    """Mint a new App Store Connect JWT valid for 20 minutes from now."""
    credentials = load_credentials()
    now = int(time.time())

    payload = {
        "iss": credentials.issuer_id,
        "iat": now,
        "exp": now + TOKEN_LIFETIME_SECONDS,
        "aud": TOKEN_AUDIENCE,
    }
    return jwt.encode(
        payload,
        credentials.private_key,
        algorithm=TOKEN_ALGORITHM,
        headers={"kid": credentials.key_id, "typ": "JWT"},
    )
