"""Base class for constraint systems.

ConstraintSystem is the interface gadgets are written against. It is the same
for the prover (every wire carries a value) and the verifier (no wire does), so
one gadget function builds the identical circuit on both sides:

    def square_gadget(cs: ConstraintSystem, x: LinearCombination, y: Variable):
        _, _, x_sq = cs.multiply(x, x)
        cs.constrain(x_sq - y)

    # Prover: values are computed as gates are added
    square_gadget(Prover(Transcript(b"sq")), ...)

    # Verifier: same gates, no values
    square_gadget(Verifier(Transcript(b"sq")), ...)

A constraint system is a single-writer object. It remembers the thread that
created it and refuses emission from any other, it is sealed once prove() or
verify() has run, and it is aborted when a gadget fails after emitting part of
its constraints.
"""

import threading
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from r1cs_gadgets.backend.proof import encode_wire_values
from r1cs_gadgets.config import DEFAULT_CONFIG, BackendConfig
from r1cs_gadgets.errors import AllocationFailure, ConstraintSystemError
from r1cs_gadgets.primitives.field import FF
from r1cs_gadgets.primitives.linear_combination import (
    LCValue,
    LinearCombination,
    Variable,
    VariableType,
)
from r1cs_gadgets.primitives.transcript import Transcript

# (left, right, output) handles of one multiplication gate
MultiplierVariables = Tuple[Variable, Variable, Variable]


class ConstraintSystem(ABC):
    """Uniform interface for circuit construction - works for prover and verifier."""

    is_prover: bool = False

    def __init__(self, transcript: Transcript, config: Optional[BackendConfig] = None):
        self.transcript = transcript
        self.config = config if config is not None else DEFAULT_CONFIG
        self.constraints: List[LinearCombination] = []
        self.num_multipliers = 0
        self.num_committed = 0
        # index of a multiplier whose right wire is still free for allocate()
        self._pending_multiplier: Optional[int] = None
        self._owner = threading.get_ident()
        self._sealed = False
        self._abort_reason: Optional[str] = None

    # --- Abstract wire allocation ---

    @abstractmethod
    def allocate(self, assignment: Optional[FF] = None) -> Variable:
        """Allocate one witness wire.

        Two consecutive allocations share a multiplication gate: the first
        takes its left wire, the second its right wire.

        Args:
            assignment: Wire value (prover), None (verifier)

        Returns:
            Handle to the new wire
        """
        pass

    @abstractmethod
    def allocate_multiplier(
        self, assignments: Optional[Tuple[FF, FF]] = None
    ) -> MultiplierVariables:
        """Allocate a multiplication gate with directly assigned inputs.

        Args:
            assignments: (left, right) values (prover), None (verifier)

        Returns:
            (left, right, output) handles; output = left * right
        """
        pass

    @abstractmethod
    def multiply(self, left: LCValue, right: LCValue) -> MultiplierVariables:
        """Allocate a gate whose inputs are constrained to equal `left` and `right`.

        Adds two constraints (left - l = 0, right - r = 0).

        Returns:
            (left, right, output) handles
        """
        pass

    # --- Constraints ---

    def constrain(self, lc: LCValue) -> None:
        """Assert that the linear combination equals zero."""
        self._check_writable()
        self.constraints.append(LinearCombination.from_value(lc))

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)

    # --- Capability checks ---

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner:
            raise ConstraintSystemError("constraint system used from a thread that does not own it")

    def _check_writable(self) -> None:
        self._check_owner()
        if self._sealed:
            raise ConstraintSystemError("constraint system is sealed; proof already produced or checked")
        if self._abort_reason is not None:
            raise ConstraintSystemError(f"constraint system was aborted: {self._abort_reason}")

    def abort(self, reason: str) -> None:
        """Mark the circuit as unusable; prove()/verify() will refuse it."""
        if self._abort_reason is None:
            self._abort_reason = reason

    @property
    def aborted(self) -> bool:
        return self._abort_reason is not None

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _seal(self) -> None:
        self._sealed = True

    # --- Shared wire bookkeeping ---

    def _new_multiplier(self) -> int:
        """Reserve the next gate index, enforcing the capacity limit."""
        self._check_writable()
        if self.num_multipliers >= self.config.capacity:
            raise AllocationFailure(
                f"multiplier capacity exhausted ({self.config.capacity} gates)"
            )
        index = self.num_multipliers
        self.num_multipliers += 1
        return index

    def _new_committed(self) -> Variable:
        self._check_writable()
        var = Variable(VariableType.COMMITTED, self.num_committed)
        self.num_committed += 1
        return var

    def _claim_pending(self) -> Optional[int]:
        """Return and clear the half-used gate, if any."""
        index = self._pending_multiplier
        self._pending_multiplier = None
        return index

    @staticmethod
    def _gate_variables(index: int) -> MultiplierVariables:
        return (
            Variable(VariableType.MULTIPLIER_LEFT, index),
            Variable(VariableType.MULTIPLIER_RIGHT, index),
            Variable(VariableType.MULTIPLIER_OUTPUT, index),
        )

    # --- Transcript helpers ---

    def _append_shape(self) -> None:
        """Absorb the public circuit shape: gate count and every constraint's terms."""
        self.transcript.append_message(b"dom-sep", b"r1cs-shape")
        self.transcript.append_u64(b"m", self.num_multipliers)
        self.transcript.append_u64(b"q", self.num_constraints)
        for lc in self.constraints:
            self.transcript.append_message(b"W", lc.encode())

    def _append_wires(self, a_L, a_R, a_O) -> None:
        """Absorb the multiplier assignment ahead of the batching challenge."""
        self.transcript.append_message(b"A_L", encode_wire_values(a_L))
        self.transcript.append_message(b"A_R", encode_wire_values(a_R))
        self.transcript.append_message(b"A_O", encode_wire_values(a_O))

    def _combine_constraints(self, z: FF, lookup) -> FF:
        """Random linear combination of all constraint values.

        Computes ((c_0 * z + c_1) * z + ...) + c_{q-1}, which is zero for a
        satisfying assignment and nonzero with overwhelming probability otherwise.
        """
        acc = FF(0)
        for lc in self.constraints:
            acc = acc * z + lc.evaluate(lookup)
        return acc
