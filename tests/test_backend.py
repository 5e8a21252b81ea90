"""Tests for the reference prover and verifier."""

import threading
from dataclasses import replace

import pytest

from r1cs_gadgets.backend import Prover, Verifier
from r1cs_gadgets.config import BackendConfig
from r1cs_gadgets.errors import (
    AllocationFailure,
    AssignmentError,
    ConstraintSystemError,
    ProofConstructionFailure,
    ProofVerificationFailure,
)
from r1cs_gadgets.primitives.field import SCALAR_MODULUS
from r1cs_gadgets.primitives.linear_combination import Variable, VariableType
from r1cs_gadgets.primitives.transcript import Transcript

from conftest import TEST_LABEL


def product_circuit(cs, x, y, z):
    """x * y = z."""
    _, _, o = cs.multiply(x, y)
    cs.constrain(o - z)


def prove_product(x, y, z, config=None):
    prover = Prover(Transcript(TEST_LABEL), config)
    coms_vars = [prover.commit(v, blinding=i + 1) for i, v in enumerate((x, y, z))]
    product_circuit(prover, *(var for _, var in coms_vars))
    return prover.prove(), [com for com, _ in coms_vars]


def verify_product(proof, commitments):
    verifier = Verifier(Transcript(TEST_LABEL))
    variables = [verifier.commit(com) for com in commitments]
    product_circuit(verifier, *variables)
    verifier.verify(proof)


class TestProveVerify:

    def test_satisfied_circuit_verifies(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        verify_product(proof, commitments)

    def test_unsatisfied_circuit_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 13)
        with pytest.raises(ProofVerificationFailure):
            verify_product(proof, commitments)

    def test_check_satisfaction_refuses_to_prove(self) -> None:
        with pytest.raises(ProofConstructionFailure):
            prove_product(3, 4, 13, BackendConfig(check_satisfaction=True))

    def test_transcript_label_mismatch_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        verifier = Verifier(Transcript(b"other"))
        product_circuit(verifier, *(verifier.commit(c) for c in commitments))
        with pytest.raises(ProofVerificationFailure):
            verifier.verify(proof)

    def test_different_circuit_shape_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        verifier = Verifier(Transcript(TEST_LABEL))
        x, y, z = (verifier.commit(c) for c in commitments)
        _, _, o = verifier.multiply(x, y)
        verifier.constrain(o - z * 1)
        verifier.constrain(x - x)
        with pytest.raises(ProofVerificationFailure):
            verifier.verify(proof)

    def test_swapped_commitments_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        with pytest.raises(ProofVerificationFailure):
            verify_product(proof, [commitments[1], commitments[0], commitments[2]])

    def test_tampered_wire_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        forged = replace(proof, a_O=(13,))
        with pytest.raises(ProofVerificationFailure):
            verify_product(forged, commitments)

    def test_tampered_opening_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        forged = replace(proof, openings=((3, 1), (4, 2), (13, 3)))
        with pytest.raises(ProofVerificationFailure):
            verify_product(forged, commitments)

    def test_out_of_range_wire_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        forged = replace(proof, a_L=(3 + SCALAR_MODULUS,))
        with pytest.raises(ProofVerificationFailure):
            verify_product(forged, commitments)

    def test_multiplier_count_mismatch_rejected(self) -> None:
        proof, commitments = prove_product(3, 4, 12)
        forged = replace(proof, a_L=proof.a_L * 2, a_R=proof.a_R * 2, a_O=proof.a_O * 2)
        with pytest.raises(ProofVerificationFailure):
            verify_product(forged, commitments)

    def test_empty_circuit_verifies(self) -> None:
        proof = Prover(Transcript(TEST_LABEL)).prove()
        assert proof.num_multipliers == 0
        Verifier(Transcript(TEST_LABEL)).verify(proof)


class TestAllocation:

    def test_allocate_packs_two_wires_per_gate(self, prover) -> None:
        a = prover.allocate(3)
        b = prover.allocate(5)
        c = prover.allocate(7)
        assert a == Variable(VariableType.MULTIPLIER_LEFT, 0)
        assert b == Variable(VariableType.MULTIPLIER_RIGHT, 0)
        assert c == Variable(VariableType.MULTIPLIER_LEFT, 1)
        assert prover.num_multipliers == 2
        assert prover.a_O[0] == 15
        assert prover.num_constraints == 0

    def test_allocate_multiplier_assigns_product(self, prover) -> None:
        l, r, o = prover.allocate_multiplier((6, 7))
        assert int(prover.evaluate(o)) == 42
        assert int(prover.evaluate(l + r)) == 13

    def test_multiply_adds_two_constraints(self, prover, verifier) -> None:
        for cs in (prover, verifier):
            x = cs.commit(3)[1] if cs.is_prover else cs.commit(prover.commitments[0])
            cs.multiply(x + 1, x * 2)
            assert cs.num_multipliers == 1
            assert cs.num_constraints == 2
        assert prover.a_L == [4] and prover.a_R == [6] and prover.a_O == [24]
        assert prover.is_satisfied()

    def test_prover_allocation_requires_value(self, prover) -> None:
        with pytest.raises(AssignmentError):
            prover.allocate()
        with pytest.raises(AssignmentError):
            prover.allocate_multiplier()

    def test_verifier_allocation_rejects_value(self, verifier) -> None:
        with pytest.raises(AssignmentError):
            verifier.allocate(1)
        with pytest.raises(AssignmentError):
            verifier.allocate_multiplier((1, 2))

    def test_capacity_exhaustion(self) -> None:
        prover = Prover(Transcript(TEST_LABEL), BackendConfig(capacity=2))
        prover.allocate_multiplier((1, 1))
        prover.allocate_multiplier((1, 1))
        with pytest.raises(AllocationFailure):
            prover.allocate_multiplier((1, 1))

    def test_unsatisfied_constraints_reported(self, prover) -> None:
        _, x = prover.commit(5)
        prover.constrain(x - 5)
        prover.constrain(x - 6)
        assert prover.unsatisfied_constraints() == [1]
        assert not prover.is_satisfied()


class TestSingleWriter:

    def test_sealed_after_prove(self, prover) -> None:
        prover.prove()
        assert prover.sealed
        with pytest.raises(ConstraintSystemError):
            prover.allocate_multiplier((1, 1))
        with pytest.raises(ProofConstructionFailure):
            prover.prove()

    def test_sealed_after_failed_verify(self, verifier) -> None:
        proof = Prover(Transcript(b"other")).prove()
        with pytest.raises(ProofVerificationFailure):
            verifier.verify(proof)
        assert verifier.sealed
        with pytest.raises(ConstraintSystemError):
            verifier.constrain(Variable.ONE)

    def test_aborted_system_refuses_to_prove(self, prover) -> None:
        prover.abort("gadget failed")
        assert prover.aborted
        with pytest.raises(ConstraintSystemError):
            prover.commit(1)
        with pytest.raises(ProofConstructionFailure):
            prover.prove()

    def test_aborted_system_refuses_to_verify(self, verifier) -> None:
        verifier.abort("gadget failed")
        with pytest.raises(ProofVerificationFailure):
            verifier.verify(Prover(Transcript(TEST_LABEL)).prove())

    def test_foreign_thread_rejected(self, prover) -> None:
        errors = []

        def emit():
            try:
                prover.allocate_multiplier((1, 1))
            except ConstraintSystemError as e:
                errors.append(e)

        worker = threading.Thread(target=emit)
        worker.start()
        worker.join()
        assert len(errors) == 1
        assert prover.num_multipliers == 0
