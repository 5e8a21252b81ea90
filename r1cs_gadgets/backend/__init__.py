"""Reference R1CS backend - prover, verifier and proof."""

from r1cs_gadgets.backend.base import ConstraintSystem, MultiplierVariables
from r1cs_gadgets.backend.proof import R1CSProof
from r1cs_gadgets.backend.prover import Prover
from r1cs_gadgets.backend.verifier import Verifier

__all__ = [
    "ConstraintSystem",
    "MultiplierVariables",
    "Prover",
    "Verifier",
    "R1CSProof",
]
