"""Prover side of the reference R1CS backend.

The prover assigns a value to every wire as the circuit is built: committed
values at commit time, gate inputs when a multiplier is allocated, and gate
outputs as the product of the inputs. prove() binds the circuit shape and the
assignment into the transcript and returns an R1CSProof.
"""

import logging
from typing import List, Optional, Tuple

from r1cs_gadgets.backend.base import ConstraintSystem, MultiplierVariables
from r1cs_gadgets.backend.proof import R1CSProof
from r1cs_gadgets.config import BackendConfig
from r1cs_gadgets.errors import AssignmentError, ProofConstructionFailure
from r1cs_gadgets.primitives.commitment import Commitment
from r1cs_gadgets.primitives.field import (
    FF,
    SCALAR_MODULUS,
    ScalarLike,
    random_scalar,
    scalar,
)
from r1cs_gadgets.primitives.linear_combination import (
    LCValue,
    LinearCombination,
    Variable,
    VariableType,
)
from r1cs_gadgets.primitives.transcript import Transcript

logger = logging.getLogger(__name__)


class Prover(ConstraintSystem):
    """Constraint system that carries a value on every wire."""

    is_prover = True

    def __init__(self, transcript: Transcript, config: Optional[BackendConfig] = None):
        super().__init__(transcript, config)
        self.a_L: List[int] = []
        self.a_R: List[int] = []
        self.a_O: List[int] = []
        self.v: List[int] = []
        self.v_blinding: List[int] = []
        self.commitments: List[Commitment] = []

    # --- Commitments ---

    def commit(
        self, value: ScalarLike, blinding: Optional[ScalarLike] = None
    ) -> Tuple[Commitment, Variable]:
        """Commit to a secret value and return its commitment and wire.

        Args:
            value: Secret scalar
            blinding: Commitment blinding factor (random if omitted)

        Returns:
            (commitment to send to the verifier, committed wire)
        """
        var = self._new_committed()
        value = scalar(value)
        blinding = random_scalar() if blinding is None else scalar(blinding)
        commitment = Commitment.create(value, blinding)
        self.v.append(int(value))
        self.v_blinding.append(int(blinding))
        self.commitments.append(commitment)
        self.transcript.append_message(b"V", commitment.digest)
        return commitment, var

    # --- Wire allocation ---

    def allocate(self, assignment: Optional[ScalarLike] = None) -> Variable:
        if assignment is None:
            raise AssignmentError("prover wire allocated without an assignment")
        self._check_writable()
        value = int(scalar(assignment))
        pending = self._claim_pending()
        if pending is None:
            index = self._new_multiplier()
            self._push_gate(value, 0)
            self._pending_multiplier = index
            return Variable(VariableType.MULTIPLIER_LEFT, index)
        self.a_R[pending] = value
        self.a_O[pending] = self.a_L[pending] * value % SCALAR_MODULUS
        return Variable(VariableType.MULTIPLIER_RIGHT, pending)

    def allocate_multiplier(
        self, assignments: Optional[Tuple[ScalarLike, ScalarLike]] = None
    ) -> MultiplierVariables:
        if assignments is None:
            raise AssignmentError("prover multiplier allocated without assignments")
        left, right = assignments
        index = self._new_multiplier()
        self._push_gate(int(scalar(left)), int(scalar(right)))
        return self._gate_variables(index)

    def multiply(self, left: LCValue, right: LCValue) -> MultiplierVariables:
        left = LinearCombination.from_value(left)
        right = LinearCombination.from_value(right)
        l_value = int(self.evaluate(left))
        r_value = int(self.evaluate(right))
        index = self._new_multiplier()
        self._push_gate(l_value, r_value)
        l_var, r_var, o_var = self._gate_variables(index)
        self.constrain(left - l_var)
        self.constrain(right - r_var)
        return l_var, r_var, o_var

    def _push_gate(self, left: int, right: int) -> None:
        self.a_L.append(left)
        self.a_R.append(right)
        self.a_O.append(left * right % SCALAR_MODULUS)

    # --- Evaluation ---

    def _value_of(self, var: Variable) -> int:
        if var.type is VariableType.ONE:
            return 1
        if var.type is VariableType.COMMITTED:
            return self.v[var.index]
        if var.type is VariableType.MULTIPLIER_LEFT:
            return self.a_L[var.index]
        if var.type is VariableType.MULTIPLIER_RIGHT:
            return self.a_R[var.index]
        return self.a_O[var.index]

    def evaluate(self, lc: LCValue) -> FF:
        """Value of a linear combination under the current assignment."""
        return LinearCombination.from_value(lc).evaluate(self._value_of)

    def unsatisfied_constraints(self) -> List[int]:
        """Indices of constraints that do not evaluate to zero."""
        return [
            i for i, lc in enumerate(self.constraints)
            if int(lc.evaluate(self._value_of)) != 0
        ]

    def is_satisfied(self) -> bool:
        return not self.unsatisfied_constraints()

    # --- Proving ---

    def prove(self) -> R1CSProof:
        """Produce a proof for the circuit built so far and seal the system.

        Raises:
            ProofConstructionFailure: if the circuit was aborted or already
                proved, or if check_satisfaction is set and a constraint fails
        """
        self._check_owner()
        if self.aborted:
            raise ProofConstructionFailure(f"circuit construction was aborted: {self._abort_reason}")
        if self.sealed:
            raise ProofConstructionFailure("proof already produced for this constraint system")

        unsatisfied = self.unsatisfied_constraints()
        if unsatisfied:
            if self.config.check_satisfaction:
                raise ProofConstructionFailure(
                    f"{len(unsatisfied)} constraint(s) unsatisfied, first at index {unsatisfied[0]}"
                )
            logger.warning(
                "proving an unsatisfied circuit: %d constraint(s) fail, first at index %d",
                len(unsatisfied), unsatisfied[0],
            )

        self._append_shape()
        self._append_wires(self.a_L, self.a_R, self.a_O)
        binding = self.transcript.challenge_bytes(b"binding", 32)
        self._seal()

        logger.info(
            "proof created: %d multipliers, %d constraints, %d commitments",
            self.num_multipliers, self.num_constraints, len(self.commitments),
        )
        return R1CSProof(
            a_L=tuple(self.a_L),
            a_R=tuple(self.a_R),
            a_O=tuple(self.a_O),
            openings=tuple(zip(self.v, self.v_blinding)),
            binding=binding,
        )
