"""MiMC-style round-cipher hash gadget.

Feistel rounds over two field elements with a cube S-box:

    xL, xR := (xL + c_j)^3 + xR, xL

The output is the final xL. mimc() computes the function on plain scalars,
hash_two_to_one() emits it as a circuit. Each round costs two multipliers:
one for t^2 and one for t^2 * t.
"""

from typing import List, Optional, Sequence

from r1cs_gadgets.gadgets.utils import constrain_lc_with_scalar, gadget
from r1cs_gadgets.primitives.field import FF, ScalarLike, random_scalar, scalar
from r1cs_gadgets.primitives.linear_combination import LCValue, LinearCombination
from r1cs_gadgets.primitives.transcript import Transcript
from r1cs_gadgets.witness import AllocatedScalar, ensure_roles


MIMC_ROUNDS = 322


def _check_rounds(constants: Sequence[ScalarLike], rounds: int) -> None:
    if rounds < 0:
        raise ValueError(f"rounds must be non-negative, got {rounds}")
    if len(constants) < rounds:
        raise ValueError(f"{rounds} rounds need {rounds} round constants, got {len(constants)}")


def generate_round_constants(rounds: int = MIMC_ROUNDS, seed: Optional[bytes] = None) -> List[FF]:
    """Round constants: derived from `seed` if given, otherwise random."""
    if seed is None:
        return [random_scalar() for _ in range(rounds)]
    transcript = Transcript(b"mimc-constants")
    transcript.append_message(b"seed", seed)
    return transcript.challenge_scalars(b"c", rounds)


def mimc(
    xl: ScalarLike,
    xr: ScalarLike,
    constants: Sequence[ScalarLike],
    rounds: Optional[int] = None,
) -> FF:
    """Hash two scalars outside the circuit."""
    if rounds is None:
        rounds = len(constants)
    _check_rounds(constants, rounds)
    xl, xr = scalar(xl), scalar(xr)
    for j in range(rounds):
        t = xl + scalar(constants[j])
        xl, xr = t * t * t + xr, xl
    return xl


@gadget
def hash_two_to_one(
    cs,
    left: LCValue,
    right: LCValue,
    rounds: int,
    round_constants: Sequence[ScalarLike],
) -> LinearCombination:
    """Emit `rounds` MiMC rounds and return the output as a linear combination."""
    _check_rounds(round_constants, rounds)
    left_v = LinearCombination.from_value(left)
    right_v = LinearCombination.from_value(right)

    for j in range(rounds):
        t = left_v + round_constants[j]
        l, _, l_sqr = cs.multiply(t, t)
        _, _, l_cube = cs.multiply(l_sqr, l)
        left_v, right_v = l_cube + right_v, left_v

    return left_v


@gadget
def hash_gadget(
    cs,
    left: AllocatedScalar,
    right: AllocatedScalar,
    rounds: int,
    constants: Sequence[ScalarLike],
    image: ScalarLike,
) -> None:
    """Constrain MiMC(left, right) to equal the public `image`."""
    ensure_roles(cs, left, right)
    output = hash_two_to_one(cs, left.variable, right.variable, rounds, constants)
    constrain_lc_with_scalar(cs, output, image)
