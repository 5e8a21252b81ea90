"""Generic R1CS circuit loader.

A circuit is described by a flat sequence of decimal tokens. Each constraint
A * B = C is written as three sides, each a term count followed by that many
(variable index, signed coefficient) pairs. For example

    (2*x1) * (2*x2) = x3 + x4

is the token sequence

    1  1 2     # A: one term, 2*x1
    1  2 2     # B: one term, 2*x2
    2  3 1  4 1    # C: two terms, x3 + x4

Variable index 0 is the constant one. Circuit files start with a line giving
the declared variable count (excluding index 0), followed by one token per
line.

Parsing and emission are separate passes: parse_circuit_table() turns the
tokens into a CircuitTable and rejects malformed input, and load_circuit()
replays a table against a constraint system.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from r1cs_gadgets.backend.proof import R1CSProof
from r1cs_gadgets.backend.prover import Prover
from r1cs_gadgets.backend.verifier import Verifier
from r1cs_gadgets.config import BackendConfig
from r1cs_gadgets.errors import MalformedCircuitTable
from r1cs_gadgets.gadgets.utils import gadget
from r1cs_gadgets.primitives.commitment import Commitment
from r1cs_gadgets.primitives.field import FF, ScalarLike, scalar, scalar_from_decimal
from r1cs_gadgets.primitives.linear_combination import LinearCombination, Variable
from r1cs_gadgets.primitives.transcript import Transcript

logger = logging.getLogger(__name__)

CIRCUIT_TRANSCRIPT_LABEL = b"R1CSCircuit"

_UNSIGNED = re.compile(r"[0-9]+")
_SIGNED = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Term:
    """coefficient * variables[index]; position is the index token's cursor."""
    index: int
    coefficient: FF
    position: int = field(default=-1, compare=False)

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return self.index == other.index and int(self.coefficient) == int(other.coefficient)

    def __hash__(self):
        return hash((self.index, int(self.coefficient)))


@dataclass(frozen=True)
class ConstraintRecord:
    """One A * B = C constraint."""
    a: Tuple[Term, ...]
    b: Tuple[Term, ...]
    c: Tuple[Term, ...]

    @property
    def terms(self) -> Tuple[Term, ...]:
        return self.a + self.b + self.c


@dataclass(frozen=True)
class CircuitTable:
    """Parsed circuit: constraint records in emission order."""
    constraints: Tuple[ConstraintRecord, ...]

    def __len__(self) -> int:
        return len(self.constraints)

    @property
    def max_index(self) -> int:
        """Largest variable index referenced, or -1 for an empty table."""
        return max((t.index for r in self.constraints for t in r.terms), default=-1)

    def check_indices(self, num_variables: int) -> None:
        """Raise MalformedCircuitTable on the first index outside [0, num_variables)."""
        for record in self.constraints:
            for term in record.terms:
                if not 0 <= term.index < num_variables:
                    raise MalformedCircuitTable(
                        f"variable index {term.index} out of range for {num_variables} variables",
                        term.position,
                    )


# --- Parsing pass ---

def _token(tokens: Sequence[str], cursor: int, expected: str) -> str:
    if cursor >= len(tokens):
        raise MalformedCircuitTable(f"truncated record: expected {expected}", cursor)
    return tokens[cursor].strip()


def _read_count(tokens: Sequence[str], cursor: int) -> int:
    token = _token(tokens, cursor, "term count")
    if _SIGNED.fullmatch(token) and token.startswith("-"):
        raise MalformedCircuitTable(f"negative term count {token}", cursor)
    if not _UNSIGNED.fullmatch(token):
        raise MalformedCircuitTable(f"term count is not an integer: {token!r}", cursor)
    return int(token)


def _read_index(tokens: Sequence[str], cursor: int, num_variables: Optional[int]) -> int:
    token = _token(tokens, cursor, "variable index")
    if not _SIGNED.fullmatch(token):
        raise MalformedCircuitTable(f"variable index is not an integer: {token!r}", cursor)
    index = int(token)
    if index < 0 or (num_variables is not None and index >= num_variables):
        raise MalformedCircuitTable(f"variable index {index} out of range", cursor)
    return index


def _read_coefficient(tokens: Sequence[str], cursor: int) -> FF:
    token = _token(tokens, cursor, "coefficient")
    try:
        return scalar_from_decimal(token)
    except ValueError as e:
        raise MalformedCircuitTable(str(e), cursor) from None


def _read_side(
    tokens: Sequence[str], cursor: int, num_variables: Optional[int]
) -> Tuple[Tuple[Term, ...], int]:
    count = _read_count(tokens, cursor)
    cursor += 1
    terms = []
    for _ in range(count):
        index = _read_index(tokens, cursor, num_variables)
        coefficient = _read_coefficient(tokens, cursor + 1)
        terms.append(Term(index, coefficient, position=cursor))
        cursor += 2
    return tuple(terms), cursor


def parse_circuit_table(tokens: Iterable[str], num_variables: Optional[int] = None) -> CircuitTable:
    """Decode a token sequence into a CircuitTable.

    Args:
        tokens: Circuit tokens, without the leading variable-count line
        num_variables: If given, indices must be below it

    Raises:
        MalformedCircuitTable: truncated record, non-integer token, negative
            term count, out-of-range index, or a coefficient that does not
            fit in 32 bytes
    """
    tokens = list(tokens)
    cursor = 0
    records: List[ConstraintRecord] = []
    while cursor < len(tokens):
        a, cursor = _read_side(tokens, cursor, num_variables)
        b, cursor = _read_side(tokens, cursor, num_variables)
        c, cursor = _read_side(tokens, cursor, num_variables)
        records.append(ConstraintRecord(a, b, c))
    logger.debug("parsed %d constraints from %d tokens", len(records), len(tokens))
    return CircuitTable(tuple(records))


# --- Emission pass ---

def _side_lc(terms: Tuple[Term, ...], variables: Sequence[Variable]) -> LinearCombination:
    return LinearCombination([(variables[t.index], t.coefficient) for t in terms])


@gadget
def load_circuit(
    cs,
    variables: Sequence[Variable],
    table: Union[CircuitTable, Iterable[str]],
) -> None:
    """Replay a circuit against `cs`.

    Every index is checked against len(variables) before the first gate is
    emitted. Each record becomes multiply(A, B) -> (_, _, M) and M - C = 0.
    """
    if isinstance(table, CircuitTable):
        table.check_indices(len(variables))
    else:
        table = parse_circuit_table(table, len(variables))

    for record in table.constraints:
        a = _side_lc(record.a, variables)
        b = _side_lc(record.b, variables)
        c = _side_lc(record.c, variables)
        _, _, m = cs.multiply(a, b)
        cs.constrain(m - c)


# --- File I/O ---

def _read_lines(path) -> List[str]:
    with Path(path).open("r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def read_circuit_file(path) -> Tuple[int, List[str]]:
    """Read a circuit file.

    Returns:
        (declared variable count excluding the constant one, circuit tokens)
    """
    lines = _read_lines(path)
    if not lines:
        raise MalformedCircuitTable("empty circuit file", 0)
    if not _UNSIGNED.fullmatch(lines[0]):
        raise MalformedCircuitTable(f"variable count is not an integer: {lines[0]!r}", 0)
    return int(lines[0]), lines[1:]


def read_witness_file(path) -> List[int]:
    """Read one signed decimal witness value per line."""
    values = []
    for lineno, line in enumerate(_read_lines(path), 1):
        if not _SIGNED.fullmatch(line):
            raise ValueError(f"{path}:{lineno}: witness value is not an integer: {line!r}")
        values.append(int(line))
    return values


# --- Prove / verify flow ---

def prove_circuit(
    witness: Sequence[ScalarLike],
    table: Union[CircuitTable, Iterable[str]],
    num_committed: int,
    transcript_label: bytes = CIRCUIT_TRANSCRIPT_LABEL,
    config: Optional[BackendConfig] = None,
) -> Tuple[R1CSProof, List[Commitment]]:
    """Prove that `witness` satisfies the circuit.

    witness[0] is the constant one. The next num_committed values are
    committed (their commitments are returned for the verifier), the rest are
    allocated as private wires.
    """
    if not witness or int(scalar(witness[0])) != 1:
        raise ValueError("witness[0] must be 1 (the constant-one variable)")
    if not 0 <= num_committed < len(witness):
        raise ValueError(f"num_committed must be in [0, {len(witness) - 1}], got {num_committed}")
    if not isinstance(table, CircuitTable):
        table = parse_circuit_table(table, len(witness))
    else:
        table.check_indices(len(witness))

    prover = Prover(Transcript(transcript_label), config)
    variables = [Variable.ONE]
    commitments = []
    for value in witness[1:num_committed + 1]:
        commitment, var = prover.commit(value)
        commitments.append(commitment)
        variables.append(var)
    for value in witness[num_committed + 1:]:
        variables.append(prover.allocate(value))

    load_circuit(prover, variables, table)
    logger.info(
        "circuit loaded: %d constraints, %d gates",
        prover.num_constraints, prover.num_multipliers,
    )
    return prover.prove(), commitments


def verify_circuit(
    proof: R1CSProof,
    commitments: Sequence[Commitment],
    num_variables: int,
    table: Union[CircuitTable, Iterable[str]],
    transcript_label: bytes = CIRCUIT_TRANSCRIPT_LABEL,
    config: Optional[BackendConfig] = None,
) -> None:
    """Verify a proof from prove_circuit().

    num_variables counts every variable including the constant one, i.e. the
    prover's witness length.

    Raises:
        ProofVerificationFailure: if the proof is rejected
    """
    if num_variables < len(commitments) + 1:
        raise ValueError(
            f"{num_variables} variables cannot hold the constant one and {len(commitments)} commitments"
        )
    if not isinstance(table, CircuitTable):
        table = parse_circuit_table(table, num_variables)
    else:
        table.check_indices(num_variables)

    verifier = Verifier(Transcript(transcript_label), config)
    variables = [Variable.ONE]
    variables.extend(verifier.commit(c) for c in commitments)
    variables.extend(verifier.allocate() for _ in range(num_variables - len(variables)))

    load_circuit(verifier, variables, table)
    verifier.verify(proof)
