"""Tests for witness wires and roles."""

import pytest

from r1cs_gadgets.errors import AssignmentError
from r1cs_gadgets.primitives.field import FF, SCALAR_MODULUS
from r1cs_gadgets.primitives.linear_combination import Variable, VariableType
from r1cs_gadgets.witness import (
    VERIFIER,
    AllocatedQuantity,
    AllocatedScalar,
    ProverRole,
    VerifierRole,
    commit_quantity,
    commit_scalar,
    ensure_roles,
    receive_quantity,
    receive_scalar,
)

VAR = Variable(VariableType.COMMITTED, 0)


def test_prover_scalar_exposes_value() -> None:
    wire = AllocatedScalar(VAR, ProverRole(-1))
    assert wire.is_assigned
    assert int(wire.assignment) == SCALAR_MODULUS - 1
    assert isinstance(wire.assignment, FF)


def test_verifier_scalar_has_no_value() -> None:
    wire = AllocatedScalar(VAR)
    assert wire.role == VERIFIER
    assert isinstance(wire.role, VerifierRole)
    assert wire.assignment is None
    assert not wire.is_assigned


def test_quantity_accepts_field_values() -> None:
    assert AllocatedQuantity(VAR, ProverRole(FF(9))).assignment == 9


@pytest.mark.parametrize("value", [-1, SCALAR_MODULUS, 1.5])
def test_quantity_rejects_out_of_range(value) -> None:
    with pytest.raises(ValueError):
        AllocatedQuantity(VAR, ProverRole(value))


def test_wires_are_immutable() -> None:
    wire = AllocatedQuantity(VAR, ProverRole(3))
    with pytest.raises(AttributeError):
        wire.role = VERIFIER


def test_ensure_roles(prover, verifier) -> None:
    assigned = AllocatedScalar(VAR, ProverRole(1))
    unassigned = AllocatedScalar(VAR)
    ensure_roles(prover, assigned, assigned)
    ensure_roles(verifier, unassigned)
    with pytest.raises(AssignmentError):
        ensure_roles(prover, assigned, unassigned)
    with pytest.raises(AssignmentError):
        ensure_roles(verifier, assigned)


def test_commit_and_receive(prover, verifier) -> None:
    com_s, s = commit_scalar(prover, 5)
    com_q, q = commit_quantity(prover, 6)
    assert int(s.assignment) == 5 and q.assignment == 6
    assert s.variable == Variable(VariableType.COMMITTED, 0)
    assert q.variable == Variable(VariableType.COMMITTED, 1)

    rs = receive_scalar(verifier, com_s)
    rq = receive_quantity(verifier, com_q)
    assert rs.variable == s.variable and rq.variable == q.variable
    assert rs.assignment is None and rq.assignment is None


def test_invalid_quantity_not_committed(prover) -> None:
    with pytest.raises(ValueError):
        commit_quantity(prover, -3)
    assert prover.num_committed == 0
