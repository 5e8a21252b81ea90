"""Gadgets - range, chunk, MiMC hash and generic circuit loader."""

from r1cs_gadgets.gadgets.chunk_proof import (
    CHUNK_BITS,
    chunk_check,
    chunked_range_check,
    split_chunks,
)
from r1cs_gadgets.gadgets.circuit_loader import (
    CircuitTable,
    ConstraintRecord,
    Term,
    load_circuit,
    parse_circuit_table,
    prove_circuit,
    read_circuit_file,
    read_witness_file,
    verify_circuit,
)
from r1cs_gadgets.gadgets.mimc import (
    MIMC_ROUNDS,
    generate_round_constants,
    hash_gadget,
    hash_two_to_one,
    mimc,
)
from r1cs_gadgets.gadgets.range_proof import bounded_range_check, range_check
from r1cs_gadgets.gadgets.utils import constrain_lc_with_scalar, gadget

__all__ = [
    # Range
    "range_check",
    "bounded_range_check",
    # Chunk
    "CHUNK_BITS",
    "chunk_check",
    "split_chunks",
    "chunked_range_check",
    # MiMC
    "MIMC_ROUNDS",
    "mimc",
    "generate_round_constants",
    "hash_two_to_one",
    "hash_gadget",
    # Circuit loader
    "Term",
    "ConstraintRecord",
    "CircuitTable",
    "parse_circuit_table",
    "load_circuit",
    "read_circuit_file",
    "read_witness_file",
    "prove_circuit",
    "verify_circuit",
    # Helpers
    "constrain_lc_with_scalar",
    "gadget",
]
