"""Range gadget: v in [0, 2^n) by bit decomposition.

Each bit b_i lives on the right wire of its own multiplier whose left wire is
1 - b_i. The gate output is constrained to zero and the two inputs to sum to
one, which leaves b_i in {0, 1}. A final constraint reconstructs v from the
bits.
"""

import logging

from r1cs_gadgets.gadgets.utils import constrain_lc_with_scalar, gadget
from r1cs_gadgets.primitives.field import FF, MAX_SAFE_BITS
from r1cs_gadgets.primitives.linear_combination import LinearCombination
from r1cs_gadgets.utils import count_bits
from r1cs_gadgets.witness import AllocatedQuantity, ensure_roles

logger = logging.getLogger(__name__)


@gadget
def range_check(cs, quantity: AllocatedQuantity, bit_size: int) -> None:
    """Constrain `quantity` to lie in [0, 2^bit_size).

    Costs bit_size multipliers and 2 * bit_size + 1 constraints. On the
    prover side the bits are taken from the quantity's value; a value of
    2^bit_size or more yields bits that do not reconstruct it, so the proof
    will not verify.

    Raises:
        ValueError: bit_size outside [0, 252]
        AssignmentError: quantity role does not match the constraint system
    """
    if not 0 <= bit_size <= MAX_SAFE_BITS:
        raise ValueError(f"bit_size must be in [0, {MAX_SAFE_BITS}], got {bit_size}")
    ensure_roles(cs, quantity)

    value = quantity.assignment
    constraint_v = [(quantity.variable, -FF(1))]
    exp_2 = 1
    for i in range(bit_size):
        if value is None:
            assignments = None
        else:
            bit = (value >> i) & 1
            assignments = (1 - bit, bit)
        a, b, o = cs.allocate_multiplier(assignments)

        # a * b = 0
        cs.constrain(o)
        # a = 1 - b
        cs.constrain(a + (b - 1))

        constraint_v.append((b, exp_2))
        exp_2 *= 2

    # -v + sum(b_i * 2^i) = 0
    cs.constrain(LinearCombination(constraint_v))


@gadget
def bounded_range_check(
    cs,
    a: AllocatedQuantity,
    b: AllocatedQuantity,
    min_value: int,
    max_value: int,
) -> None:
    """Constrain a hidden v to [min_value, max_value].

    The caller commits a = v - min_value and b = max_value - v. Both are range
    checked at the bit length of max_value, and a + b = max_value - min_value
    ties them to the same v.
    """
    if min_value < 0 or min_value > max_value:
        raise ValueError(f"invalid bounds [{min_value}, {max_value}]")
    n = count_bits(max_value)
    logger.debug("bounded range check [%d, %d] at %d bits", min_value, max_value, n)

    range_check(cs, a, n)
    range_check(cs, b, n)
    constrain_lc_with_scalar(cs, a.variable + b.variable, max_value - min_value)
