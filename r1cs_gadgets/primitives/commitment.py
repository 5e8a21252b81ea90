"""
Hash-based commitments to single scalars.

A commitment binds a value behind a random blinding factor:

    digest = blake3("r1cs-gadgets/commit" | value | blinding)

Opening reveals both scalars. Hiding rests on the blinding being uniform.
"""

from dataclasses import dataclass

import blake3

from r1cs_gadgets.primitives.field import ScalarLike, scalar_to_bytes

COMMITMENT_DOMAIN = b"r1cs-gadgets/commit"
COMMITMENT_SIZE = 32


@dataclass(frozen=True)
class Commitment:
    digest: bytes

    @classmethod
    def create(cls, value: ScalarLike, blinding: ScalarLike) -> "Commitment":
        hasher = blake3.blake3(COMMITMENT_DOMAIN)
        hasher.update(scalar_to_bytes(value))
        hasher.update(scalar_to_bytes(blinding))
        return cls(hasher.digest(length=COMMITMENT_SIZE))

    def opens_to(self, value: ScalarLike, blinding: ScalarLike) -> bool:
        return Commitment.create(value, blinding) == self

    def hex(self) -> str:
        return self.digest.hex()

    def __repr__(self) -> str:
        return f"Commitment({self.digest.hex()[:16]}...)"
