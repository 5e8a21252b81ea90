"""Proof object of the reference backend."""

from dataclasses import dataclass
from typing import Sequence, Tuple

from r1cs_gadgets.primitives.field import SCALAR_BYTES


@dataclass(frozen=True)
class R1CSProof:
    """
    Transparent R1CS proof.

    Carries the full multiplier assignment and the commitment openings, bound
    to the circuit shape by a transcript digest. It convinces a verifier that
    the committed values satisfy the circuit but reveals them; it is meant for
    testing and replaying gadgets, not for hiding witnesses.

    Attributes:
        a_L: Left input of every multiplication gate
        a_R: Right input of every multiplication gate
        a_O: Output of every multiplication gate
        openings: (value, blinding) for each commitment, in commit order
        binding: Transcript digest over commitments, circuit shape and wires
    """
    a_L: Tuple[int, ...]
    a_R: Tuple[int, ...]
    a_O: Tuple[int, ...]
    openings: Tuple[Tuple[int, int], ...]
    binding: bytes

    @property
    def num_multipliers(self) -> int:
        return len(self.a_L)


def encode_wire_values(values: Sequence[int]) -> bytes:
    """Concatenate 32-byte little-endian encodings (values already reduced)."""
    return b"".join(v.to_bytes(SCALAR_BYTES, "little") for v in values)
