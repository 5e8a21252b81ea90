"""Allocated witness wires.

Each wire pairs a constraint-system variable with a role. On the prover side
the role carries the wire's value; on the verifier side it carries nothing:

    commitment, x = commit_scalar(prover, 7)       # AllocatedScalar, ProverRole(7)
    x = receive_scalar(verifier, commitment)       # AllocatedScalar, VerifierRole

Gadgets read `assignment`, which is None for verifier wires, and call
ensure_roles() first so a prover wire never reaches a verifier system or the
other way round.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from r1cs_gadgets.errors import AssignmentError
from r1cs_gadgets.primitives.commitment import Commitment
from r1cs_gadgets.primitives.field import FF, SCALAR_MODULUS, ScalarLike, scalar
from r1cs_gadgets.primitives.linear_combination import Variable


@dataclass(frozen=True)
class ProverRole:
    """Wire known to the prover, with its value."""
    value: object


@dataclass(frozen=True)
class VerifierRole:
    """Wire seen by the verifier; it has no value."""


Role = Union[ProverRole, VerifierRole]

VERIFIER = VerifierRole()


@dataclass(frozen=True)
class AllocatedScalar:
    """A field-valued witness wire."""
    variable: Variable
    role: Role = VERIFIER

    def __post_init__(self):
        if isinstance(self.role, ProverRole):
            object.__setattr__(self, "role", ProverRole(scalar(self.role.value)))

    @property
    def assignment(self) -> Optional[FF]:
        return self.role.value if isinstance(self.role, ProverRole) else None

    @property
    def is_assigned(self) -> bool:
        return isinstance(self.role, ProverRole)


@dataclass(frozen=True)
class AllocatedQuantity:
    """A wire holding a non-negative integer, reasoned about bit by bit."""
    variable: Variable
    role: Role = VERIFIER

    def __post_init__(self):
        if isinstance(self.role, ProverRole):
            value = self.role.value
            if isinstance(value, FF):
                value = int(value)
            if not isinstance(value, int) or not 0 <= value < SCALAR_MODULUS:
                raise ValueError(f"quantity must be an integer in [0, l), got {value!r}")
            object.__setattr__(self, "role", ProverRole(value))

    @property
    def assignment(self) -> Optional[int]:
        return self.role.value if isinstance(self.role, ProverRole) else None

    @property
    def is_assigned(self) -> bool:
        return isinstance(self.role, ProverRole)


Allocated = Union[AllocatedScalar, AllocatedQuantity]


def ensure_roles(cs, *wires: Allocated) -> None:
    """Fail fast if any wire's role does not match the constraint system.

    Raises:
        AssignmentError: a prover system got a wire without a value, or a
            verifier system got one with a value
    """
    for i, wire in enumerate(wires):
        if cs.is_prover and not wire.is_assigned:
            raise AssignmentError(f"wire {i} ({wire.variable!r}) has no assignment on the prover side")
        if not cs.is_prover and wire.is_assigned:
            raise AssignmentError(f"wire {i} ({wire.variable!r}) carries an assignment on the verifier side")


# --- Commit helpers ---

def commit_scalar(
    prover, value: ScalarLike, blinding: Optional[ScalarLike] = None
) -> Tuple[Commitment, AllocatedScalar]:
    commitment, var = prover.commit(value, blinding)
    return commitment, AllocatedScalar(var, ProverRole(value))


def commit_quantity(
    prover, value: int, blinding: Optional[ScalarLike] = None
) -> Tuple[Commitment, AllocatedQuantity]:
    # validate before the commitment reaches the transcript
    quantity = AllocatedQuantity(Variable.ONE, ProverRole(value))
    commitment, var = prover.commit(value, blinding)
    return commitment, AllocatedQuantity(var, quantity.role)


def receive_scalar(verifier, commitment: Commitment) -> AllocatedScalar:
    return AllocatedScalar(verifier.commit(commitment))


def receive_quantity(verifier, commitment: Commitment) -> AllocatedQuantity:
    return AllocatedQuantity(verifier.commit(commitment))
