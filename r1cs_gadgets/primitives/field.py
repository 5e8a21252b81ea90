"""Scalar field of the Ristretto255 group.

Uses galois for all field arithmetic. FF is the field type; every wire value,
coefficient and challenge in the constraint system is an FF element.

The group order l = 2^252 + 27742317777372353535851937790883648493 is the
field Bulletproofs-style R1CS proofs are expressed over. Any 252-bit integer
embeds without reduction, which is what range decompositions rely on.
"""

import re
import secrets
from typing import Union

import galois

# --- Field Construction ---

SCALAR_MODULUS = 2**252 + 27742317777372353535851937790883648493

# Factoring l - 1 is out of reach for galois' search, so the generator is given.
FF = galois.GF(SCALAR_MODULUS, primitive_element=2, verify=False)
"""Scalar field GF(l)."""

SCALAR_BYTES = 32

# Largest bit size whose power-of-two sum cannot wrap around l.
MAX_SAFE_BITS = SCALAR_MODULUS.bit_length() - 1

ScalarLike = Union[int, FF]

_DECIMAL_TOKEN = re.compile(r"-?[0-9]+")


# --- Conversions ---

def scalar(value: ScalarLike) -> FF:
    """Reduce an integer (possibly negative) or pass through an FF element."""
    if isinstance(value, FF):
        return value
    return FF(int(value) % SCALAR_MODULUS)


def scalar_to_bytes(value: ScalarLike) -> bytes:
    """Canonical 32-byte little-endian encoding."""
    return int(scalar(value)).to_bytes(SCALAR_BYTES, "little")


def scalar_from_bytes(data: bytes) -> FF:
    """Interpret little-endian bytes as an integer and reduce it modulo l."""
    return FF(int.from_bytes(data, "little") % SCALAR_MODULUS)


def scalar_from_decimal(token: str) -> FF:
    """Parse a signed decimal string into the field.

    The magnitude is laid out as 32 little-endian bytes and the sign is applied
    after the conversion, so "-5" maps to l - 5. Magnitudes that fit in 32 bytes
    but exceed l are reduced modulo l.

    Raises:
        ValueError: if the token is not a decimal integer or its magnitude does
            not fit in 32 bytes.
    """
    token = token.strip()
    if not _DECIMAL_TOKEN.fullmatch(token):
        raise ValueError(f"not a decimal integer: {token!r}")
    negative = token.startswith("-")
    magnitude = int(token[1:] if negative else token)
    try:
        le_bytes = magnitude.to_bytes(SCALAR_BYTES, "little")
    except OverflowError:
        raise ValueError(f"coefficient {token} does not fit in {SCALAR_BYTES} bytes") from None
    value = scalar_from_bytes(le_bytes)
    return -value if negative else value


def random_scalar() -> FF:
    """Uniform scalar from the OS CSPRNG, used for commitment blindings."""
    return FF(secrets.randbelow(SCALAR_MODULUS))
