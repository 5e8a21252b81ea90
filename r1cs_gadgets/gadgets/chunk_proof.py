"""Chunk gadget: z = u + v*2^16 + x*2^32 + y*2^48.

chunk_check only certifies the arithmetic composition. A 64-bit range proof
is four 16-bit range checks on the chunks plus this one constraint, which is
what chunked_range_check emits.
"""

from typing import Sequence, Tuple

from r1cs_gadgets.gadgets.range_proof import range_check
from r1cs_gadgets.gadgets.utils import gadget
from r1cs_gadgets.primitives.linear_combination import LinearCombination
from r1cs_gadgets.witness import AllocatedQuantity, ensure_roles

CHUNK_BITS = 16
NUM_CHUNKS = 4


@gadget
def chunk_check(
    cs,
    u: AllocatedQuantity,
    v: AllocatedQuantity,
    x: AllocatedQuantity,
    y: AllocatedQuantity,
    z: AllocatedQuantity,
) -> None:
    """Emit the single constraint -z + u + v*2^16 + x*2^32 + y*2^48 = 0.

    The chunks are not range checked here.
    """
    ensure_roles(cs, u, v, x, y, z)
    radix = 1 << CHUNK_BITS
    cs.constrain(LinearCombination([
        (z.variable, -1),
        (u.variable, 1),
        (v.variable, radix),
        (x.variable, radix ** 2),
        (y.variable, radix ** 3),
    ]))


def split_chunks(value: int) -> Tuple[int, int, int, int]:
    """Split a 64-bit integer into its four 16-bit chunks, least significant first."""
    if not 0 <= value < 1 << (CHUNK_BITS * NUM_CHUNKS):
        raise ValueError(f"value must fit in {CHUNK_BITS * NUM_CHUNKS} bits, got {value}")
    mask = (1 << CHUNK_BITS) - 1
    return tuple((value >> (CHUNK_BITS * i)) & mask for i in range(NUM_CHUNKS))


@gadget
def chunked_range_check(cs, chunks: Sequence[AllocatedQuantity], whole: AllocatedQuantity) -> None:
    """Prove `whole` is a 64-bit value by range checking each 16-bit chunk."""
    if len(chunks) != NUM_CHUNKS:
        raise ValueError(f"expected {NUM_CHUNKS} chunks, got {len(chunks)}")
    ensure_roles(cs, whole, *chunks)
    for chunk in chunks:
        range_check(cs, chunk, CHUNK_BITS)
    chunk_check(cs, *chunks, whole)
