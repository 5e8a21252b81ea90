"""
R1CS Gadgets

Gadgets for rank-1 constraint systems over the Ristretto255 scalar field,
written once against a constraint-system interface and run unchanged by the
prover and the verifier.

This package provides:
- Scalar field arithmetic (via galois)
- Variables and linear combinations
- Witness wires with prover/verifier roles
- Range, chunk and MiMC hash gadgets
- A loader that replays R1CS circuits from token tables
- A transparent reference backend (blake3 transcript and commitments)

Usage:
    from r1cs_gadgets import Prover, Verifier, Transcript, range_check
    from r1cs_gadgets.witness import commit_quantity, receive_quantity

    prover = Prover(Transcript(b"range"))
    commitment, v = commit_quantity(prover, 13)
    range_check(prover, v, 8)
    proof = prover.prove()

    verifier = Verifier(Transcript(b"range"))
    range_check(verifier, receive_quantity(verifier, commitment), 8)
    verifier.verify(proof)
"""

# Field, linear combinations, transcript, commitments
from r1cs_gadgets.primitives import (
    FF,
    SCALAR_MODULUS,
    Commitment,
    LinearCombination,
    Transcript,
    Variable,
    VariableType,
    scalar,
)

# Backend
from r1cs_gadgets.backend import ConstraintSystem, Prover, R1CSProof, Verifier
from r1cs_gadgets.config import DEFAULT_CONFIG, BackendConfig, load_config
from r1cs_gadgets.errors import (
    AllocationFailure,
    AssignmentError,
    ConstraintSystemError,
    GadgetError,
    MalformedCircuitTable,
    ProofConstructionFailure,
    ProofVerificationFailure,
)

# Witness model
from r1cs_gadgets.witness import (
    AllocatedQuantity,
    AllocatedScalar,
    ProverRole,
    VerifierRole,
)

# Gadgets
from r1cs_gadgets.gadgets import (
    MIMC_ROUNDS,
    CircuitTable,
    bounded_range_check,
    chunk_check,
    chunked_range_check,
    hash_gadget,
    hash_two_to_one,
    load_circuit,
    mimc,
    parse_circuit_table,
    range_check,
)

__version__ = "0.1.0"

__all__ = [
    # Field
    "FF",
    "SCALAR_MODULUS",
    "scalar",
    # Linear combinations
    "Variable",
    "VariableType",
    "LinearCombination",
    # Backend
    "Transcript",
    "Commitment",
    "ConstraintSystem",
    "Prover",
    "Verifier",
    "R1CSProof",
    "BackendConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Errors
    "GadgetError",
    "AllocationFailure",
    "AssignmentError",
    "ConstraintSystemError",
    "MalformedCircuitTable",
    "ProofConstructionFailure",
    "ProofVerificationFailure",
    # Witness model
    "AllocatedScalar",
    "AllocatedQuantity",
    "ProverRole",
    "VerifierRole",
    # Gadgets
    "range_check",
    "bounded_range_check",
    "chunk_check",
    "chunked_range_check",
    "mimc",
    "MIMC_ROUNDS",
    "hash_two_to_one",
    "hash_gadget",
    "CircuitTable",
    "parse_circuit_table",
    "load_circuit",
]
