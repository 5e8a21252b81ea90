"""
Fiat-Shamir transcript using a blake3 sponge.

Prover and verifier start from a transcript created with the same label and
absorb the same messages in the same order (commitments, circuit shape, wire
values), so the challenges they squeeze agree exactly when their views agree.
"""

from typing import List

import blake3

from r1cs_gadgets.primitives.field import FF, ScalarLike, scalar_from_bytes, scalar_to_bytes


class Transcript:
    """
    Labelled transcript: every absorbed message is framed as
    len(label) | label | len(message) | message, so distinct message
    sequences never hash to the same state.
    """

    def __init__(self, label: bytes):
        self.hasher = blake3.blake3()
        self.append_message(b"dom-sep", label)

    def append_message(self, label: bytes, message: bytes) -> None:
        self.hasher.update(len(label).to_bytes(4, "little"))
        self.hasher.update(label)
        self.hasher.update(len(message).to_bytes(8, "little"))
        self.hasher.update(message)

    def append_u64(self, label: bytes, value: int) -> None:
        self.append_message(label, value.to_bytes(8, "little"))

    def append_scalar(self, label: bytes, value: ScalarLike) -> None:
        self.append_message(label, scalar_to_bytes(value))

    def challenge_bytes(self, label: bytes, num_bytes: int) -> bytes:
        """Squeeze `num_bytes`; the output is fed back so later challenges differ."""
        self.append_u64(label, num_bytes)
        digest = self.hasher.digest(length=num_bytes)
        self.hasher.update(digest)
        return digest

    def challenge_scalar(self, label: bytes) -> FF:
        # 64 bytes keeps the modular bias negligible
        return scalar_from_bytes(self.challenge_bytes(label, 64))

    def challenge_scalars(self, label: bytes, n: int) -> List[FF]:
        return [self.challenge_scalar(label) for _ in range(n)]
