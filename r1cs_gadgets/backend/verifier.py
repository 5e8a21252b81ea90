"""Verifier side of the reference R1CS backend.

The verifier rebuilds the circuit from the same gadget calls as the prover but
without values. verify() then replays the prover's transcript, checks every
commitment opening, every multiplication gate, and a random linear combination
of all linear constraints.
"""

import hmac
import logging
from typing import List, Optional

import numpy as np

from r1cs_gadgets.backend.base import ConstraintSystem, MultiplierVariables
from r1cs_gadgets.backend.proof import R1CSProof
from r1cs_gadgets.config import BackendConfig
from r1cs_gadgets.errors import AssignmentError, ProofVerificationFailure
from r1cs_gadgets.primitives.commitment import Commitment
from r1cs_gadgets.primitives.field import FF, SCALAR_MODULUS
from r1cs_gadgets.primitives.linear_combination import (
    LCValue,
    LinearCombination,
    Variable,
    VariableType,
)
from r1cs_gadgets.primitives.transcript import Transcript

logger = logging.getLogger(__name__)


class Verifier(ConstraintSystem):
    """Constraint system that records circuit structure only."""

    is_prover = False

    def __init__(self, transcript: Transcript, config: Optional[BackendConfig] = None):
        super().__init__(transcript, config)
        self.commitments: List[Commitment] = []

    def commit(self, commitment: Commitment) -> Variable:
        """Register a commitment received from the prover and return its wire."""
        var = self._new_committed()
        self.commitments.append(commitment)
        self.transcript.append_message(b"V", commitment.digest)
        return var

    def allocate(self, assignment=None) -> Variable:
        if assignment is not None:
            raise AssignmentError("verifier wires carry no assignment")
        self._check_writable()
        pending = self._claim_pending()
        if pending is None:
            index = self._new_multiplier()
            self._pending_multiplier = index
            return Variable(VariableType.MULTIPLIER_LEFT, index)
        return Variable(VariableType.MULTIPLIER_RIGHT, pending)

    def allocate_multiplier(self, assignments=None) -> MultiplierVariables:
        if assignments is not None:
            raise AssignmentError("verifier multipliers carry no assignment")
        return self._gate_variables(self._new_multiplier())

    def multiply(self, left: LCValue, right: LCValue) -> MultiplierVariables:
        left = LinearCombination.from_value(left)
        right = LinearCombination.from_value(right)
        l_var, r_var, o_var = self._gate_variables(self._new_multiplier())
        self.constrain(left - l_var)
        self.constrain(right - r_var)
        return l_var, r_var, o_var

    # --- Verification ---

    def verify(self, proof: R1CSProof) -> None:
        """Check a proof against the circuit built so far.

        The system is sealed afterwards whatever the outcome.

        Raises:
            ProofVerificationFailure: if any check fails
        """
        self._check_owner()
        if self.aborted:
            raise ProofVerificationFailure(f"circuit construction was aborted: {self._abort_reason}")
        if self.sealed:
            raise ProofVerificationFailure("constraint system already used for verification")
        try:
            self._verify(proof)
        except ProofVerificationFailure as e:
            logger.warning("proof rejected: %s", e)
            raise
        finally:
            self._seal()
        logger.info(
            "proof accepted: %d multipliers, %d constraints",
            self.num_multipliers, self.num_constraints,
        )

    def _verify(self, proof: R1CSProof) -> None:
        m = self.num_multipliers
        if not (len(proof.a_L) == len(proof.a_R) == len(proof.a_O) == m):
            raise ProofVerificationFailure(
                f"proof has {len(proof.a_L)} multipliers, circuit has {m}"
            )
        if len(proof.openings) != len(self.commitments):
            raise ProofVerificationFailure(
                f"proof opens {len(proof.openings)} commitments, circuit has {len(self.commitments)}"
            )
        for wire in (proof.a_L, proof.a_R, proof.a_O):
            if any(not 0 <= v < SCALAR_MODULUS for v in wire):
                raise ProofVerificationFailure("wire value out of field range")

        for i, (commitment, (value, blinding)) in enumerate(zip(self.commitments, proof.openings)):
            if not (0 <= value < SCALAR_MODULUS and 0 <= blinding < SCALAR_MODULUS):
                raise ProofVerificationFailure(f"opening {i} out of field range")
            if not commitment.opens_to(value, blinding):
                raise ProofVerificationFailure(f"opening {i} does not match its commitment")

        self._append_shape()
        self._append_wires(proof.a_L, proof.a_R, proof.a_O)
        binding = self.transcript.challenge_bytes(b"binding", 32)
        if not hmac.compare_digest(binding, proof.binding):
            raise ProofVerificationFailure("transcript binding mismatch")

        if m:
            a_L, a_R, a_O = FF(list(proof.a_L)), FF(list(proof.a_R)), FF(list(proof.a_O))
            if not np.all(a_L * a_R == a_O):
                raise ProofVerificationFailure("multiplication gate not satisfied")

        values = [value for value, _ in proof.openings]

        def lookup(var: Variable) -> int:
            if var.type is VariableType.ONE:
                return 1
            if var.type is VariableType.COMMITTED:
                return values[var.index]
            if var.type is VariableType.MULTIPLIER_LEFT:
                return proof.a_L[var.index]
            if var.type is VariableType.MULTIPLIER_RIGHT:
                return proof.a_R[var.index]
            return proof.a_O[var.index]

        z = self.transcript.challenge_scalar(b"z")
        if int(self._combine_constraints(z, lookup)) != 0:
            raise ProofVerificationFailure("linear constraints not satisfied")
