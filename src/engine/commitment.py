"""
Fair Dice - Commitment Protocol

HMAC commit/reveal used at every decision point. The host draws a secret,
publishes only the digest, collects the external party's number and then
reveals key and secret so the digest can be checked independently.

Ordering matters: the digest must be shown before the external input is
requested, and key/secret only after that input is locked in.
"""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass, field

from src.engine.errors import ConfigurationError, ProtocolError

logger = logging.getLogger(__name__)

DEFAULT_KEY_BYTES = 32
DIGEST_ALGORITHM = hashlib.sha3_256


def _encode_secret(secret: int) -> bytes:
    return str(secret).encode("utf-8")


def compute_digest(key: bytes, secret: int) -> str:
    """Keyed hash of a secret, as upper-case hex."""
    return hmac.new(key, _encode_secret(secret), DIGEST_ALGORITHM).hexdigest().upper()


@dataclass(frozen=True)
class Commitment:
    """
    A published digest bound to a secret that is revealed later.

    Attributes:
        value_range: Secret is drawn from [0, value_range)
        secret: Host's secret number
        key: Random HMAC key (never shorter than 32 bytes)
        digest: HMAC(key, secret) as upper-case hex
    """
    value_range: int
    secret: int = field(repr=False)
    key: bytes = field(repr=False)
    digest: str

    @property
    def key_hex(self) -> str:
        return self.key.hex().upper()


def generate_commitment(value_range: int, key_bytes: int = DEFAULT_KEY_BYTES) -> Commitment:
    """
    Draw a uniform secret in [0, value_range) and commit to it.

    Args:
        value_range: Number of possible secrets (must be positive)
        key_bytes: Length of the random HMAC key

    Returns:
        Fresh Commitment; never reuse it for another decision

    Raises:
        ConfigurationError: If value_range is not positive or the key is too short
    """
    if isinstance(value_range, bool) or not isinstance(value_range, int) or value_range <= 0:
        raise ConfigurationError(f"Commitment range must be a positive integer, got {value_range!r}.")
    if key_bytes < DEFAULT_KEY_BYTES:
        raise ConfigurationError(
            f"Commitment key must be at least {DEFAULT_KEY_BYTES} bytes, got {key_bytes}."
        )

    secret = secrets.randbelow(value_range)
    key = secrets.token_bytes(key_bytes)
    commitment = Commitment(
        value_range=value_range,
        secret=secret,
        key=key,
        digest=compute_digest(key, secret),
    )
    logger.debug("Committed to a value in 0..%d (HMAC=%s)", value_range - 1, commitment.digest)
    return commitment


def verify(commitment: Commitment, revealed_key: bytes, revealed_secret: int) -> bool:
    """Check that the revealed key and secret reproduce the published digest."""
    recomputed = compute_digest(revealed_key, revealed_secret)
    return hmac.compare_digest(recomputed, commitment.digest)


def ensure_verified(commitment: Commitment, revealed_key: bytes, revealed_secret: int) -> None:
    """Like verify(), but raise ProtocolError on mismatch."""
    if not verify(commitment, revealed_key, revealed_secret):
        raise ProtocolError(
            f"Revealed values do not match the published digest {commitment.digest}."
        )


def combine(secret: int, external_input: int, modulus: int) -> int:
    """
    Fair combination of the host secret and the external number.

    With secret uniform on [0, modulus) and chosen independently of
    external_input, the result is uniform for every external_input.
    """
    if modulus <= 0:
        raise ConfigurationError(f"Modulus must be positive, got {modulus}.")
    return (secret + external_input) % modulus
