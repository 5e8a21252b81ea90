"""Variables and linear combinations over the scalar field.

A Variable is a handle into a constraint system's wire space. Arithmetic on
variables builds LinearCombination values, which are what constraints and
multiplication gates consume:

    lc = var_a + var_b * 2 - 7       # a + 2b - 7
    cs.constrain(lc)                 # assert a + 2b - 7 = 0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Tuple, Union

from r1cs_gadgets.primitives.field import FF, SCALAR_MODULUS, scalar, scalar_to_bytes


class VariableType(Enum):
    """Wire families of a Bulletproofs-style constraint system."""
    ONE = 0
    COMMITTED = 1
    MULTIPLIER_LEFT = 2
    MULTIPLIER_RIGHT = 3
    MULTIPLIER_OUTPUT = 4


@dataclass(frozen=True)
class Variable:
    """Opaque wire handle: (family, index within the family)."""
    type: VariableType
    index: int = 0

    # Field elements are numpy arrays; opt out of ufuncs so FF(2) * var
    # falls back to the reflected operators below.
    __array_ufunc__ = None

    def __add__(self, other) -> "LinearCombination":
        return LinearCombination.from_value(self) + other

    def __radd__(self, other) -> "LinearCombination":
        return LinearCombination.from_value(other) + self

    def __sub__(self, other) -> "LinearCombination":
        return LinearCombination.from_value(self) - other

    def __rsub__(self, other) -> "LinearCombination":
        return LinearCombination.from_value(other) - self

    def __mul__(self, coeff) -> "LinearCombination":
        return LinearCombination([(self, scalar(coeff))])

    __rmul__ = __mul__

    def __neg__(self) -> "LinearCombination":
        return LinearCombination([(self, -FF(1))])

    def encode(self) -> bytes:
        """Stable byte encoding used when absorbing circuit shape."""
        return bytes([self.type.value]) + self.index.to_bytes(8, "little")

    def __repr__(self) -> str:
        if self.type is VariableType.ONE:
            return "ONE"
        return f"{self.type.name.lower()}[{self.index}]"


Variable.ONE = Variable(VariableType.ONE)

Term = Tuple[Variable, FF]
LCValue = Union["LinearCombination", Variable, int, FF]


class LinearCombination:
    """Ordered weighted sum of variables.

    Terms are kept in insertion order and like terms are not merged until
    simplify() is called, so two systems that build the same combination the
    same way see identical term sequences.
    """

    __slots__ = ("terms",)

    __array_ufunc__ = None

    def __init__(self, terms: Iterable[Tuple[Variable, object]] = ()):
        self.terms: List[Term] = [(var, scalar(coeff)) for var, coeff in terms]

    @classmethod
    def from_value(cls, value: LCValue) -> "LinearCombination":
        """Coerce a variable, integer or field element into a combination."""
        if isinstance(value, LinearCombination):
            return value
        if isinstance(value, Variable):
            return cls([(value, FF(1))])
        return cls([(Variable.ONE, scalar(value))])

    # --- Arithmetic ---

    def __add__(self, other: LCValue) -> "LinearCombination":
        other = LinearCombination.from_value(other)
        return LinearCombination(self.terms + other.terms)

    def __radd__(self, other: LCValue) -> "LinearCombination":
        return LinearCombination.from_value(other) + self

    def __sub__(self, other: LCValue) -> "LinearCombination":
        return self + (-LinearCombination.from_value(other))

    def __rsub__(self, other: LCValue) -> "LinearCombination":
        return LinearCombination.from_value(other) - self

    def __neg__(self) -> "LinearCombination":
        return LinearCombination([(var, -coeff) for var, coeff in self.terms])

    def __mul__(self, coeff) -> "LinearCombination":
        if isinstance(coeff, (LinearCombination, Variable)):
            raise TypeError("linear combinations only multiply by scalars; use cs.multiply()")
        factor = scalar(coeff)
        return LinearCombination([(var, c * factor) for var, c in self.terms])

    __rmul__ = __mul__

    # --- Inspection ---

    def collect(self) -> Dict[Variable, int]:
        """Coefficient per variable after merging like terms, zeros dropped."""
        merged: Dict[Variable, int] = {}
        for var, coeff in self.terms:
            merged[var] = (merged.get(var, 0) + int(coeff)) % SCALAR_MODULUS
        return {var: c for var, c in merged.items() if c != 0}

    def simplify(self) -> "LinearCombination":
        return LinearCombination(self.collect().items())

    def evaluate(self, lookup: Callable[[Variable], int]) -> FF:
        """Evaluate with wire values supplied as integers by `lookup`."""
        total = 0
        for var, coeff in self.terms:
            total += int(coeff) * lookup(var)
        return FF(total % SCALAR_MODULUS)

    def encode(self) -> bytes:
        """Byte encoding of the term sequence (order-sensitive)."""
        parts = [len(self.terms).to_bytes(8, "little")]
        for var, coeff in self.terms:
            parts.append(var.encode())
            parts.append(scalar_to_bytes(coeff))
        return b"".join(parts)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __eq__(self, other) -> bool:
        if not isinstance(other, (LinearCombination, Variable, int, FF)):
            return NotImplemented
        return self.collect() == LinearCombination.from_value(other).collect()

    __hash__ = None

    def __repr__(self) -> str:
        body = " + ".join(f"{int(c)}*{var!r}" for var, c in self.terms)
        return f"LinearCombination({body or '0'})"
