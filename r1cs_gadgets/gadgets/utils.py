"""Helpers shared by the gadgets."""

import logging
from functools import wraps

from r1cs_gadgets.primitives.field import ScalarLike
from r1cs_gadgets.primitives.linear_combination import LCValue, LinearCombination

logger = logging.getLogger(__name__)


def constrain_lc_with_scalar(cs, lc: LCValue, value: ScalarLike) -> None:
    """Constrain a linear combination to equal a public scalar."""
    cs.constrain(LinearCombination.from_value(lc) - value)


def gadget(fn):
    """Mark a function as a gadget.

    The first argument must be the constraint system. If the gadget raises
    after it has emitted constraints or multipliers, the system is aborted so
    the partial circuit cannot be proved or verified.
    """

    @wraps(fn)
    def wrapper(cs, *args, **kwargs):
        constraints, multipliers = cs.num_constraints, cs.num_multipliers
        try:
            result = fn(cs, *args, **kwargs)
        except Exception as e:
            if (cs.num_constraints, cs.num_multipliers) != (constraints, multipliers):
                cs.abort(f"{fn.__name__} failed after emitting: {e}")
            raise
        logger.debug(
            "%s: +%d multipliers, +%d constraints",
            fn.__name__,
            cs.num_multipliers - multipliers,
            cs.num_constraints - constraints,
        )
        return result

    return wrapper
