"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import hmac
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from expense_tracker.config import get_settings

# pbkdf2_sha256 draws a fresh random salt for every hash and verifies in constant time.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
    # Older hashes below this cost are upgraded on the next successful login.
    pbkdf2_sha256__min_rounds=310_000,
)

ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or malformed stored hash.
        return False


def needs_rehash(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


# ---- JWT ----
settings = get_settings()


def compute_credential_signature(password_hash: str, status: str) -> str:
    """Fingerprint of the stored credential and account status.

    Embedded in every token so that a password reset, suspension or deletion
    invalidates sessions issued before the change.
    """

    return sha256(f"{password_hash}:{status}".encode()).hexdigest()


def credential_signature_matches(claim: str, password_hash: str, status: str) -> bool:
    expected = compute_credential_signature(password_hash, status)
    return hmac.compare_digest(claim.encode(), expected.encode())


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_secure_password() -> str:
    """Generate a random temporary password between 10 and 14 characters."""

    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    length = secrets.choice(range(10, 15))

    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
        ):
            return password
