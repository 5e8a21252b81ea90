"""Primitives - field, linear combinations, transcript and commitments."""

from r1cs_gadgets.primitives.commitment import Commitment
from r1cs_gadgets.primitives.field import (
    FF,
    MAX_SAFE_BITS,
    SCALAR_MODULUS,
    random_scalar,
    scalar,
    scalar_from_bytes,
    scalar_from_decimal,
    scalar_to_bytes,
)
from r1cs_gadgets.primitives.linear_combination import (
    LinearCombination,
    Variable,
    VariableType,
)
from r1cs_gadgets.primitives.transcript import Transcript

__all__ = [
    # Field
    "FF",
    "SCALAR_MODULUS",
    "MAX_SAFE_BITS",
    "scalar",
    "scalar_to_bytes",
    "scalar_from_bytes",
    "scalar_from_decimal",
    "random_scalar",
    # Linear combinations
    "Variable",
    "VariableType",
    "LinearCombination",
    # Transcript
    "Transcript",
    # Commitments
    "Commitment",
]
