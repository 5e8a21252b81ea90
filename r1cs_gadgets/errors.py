"""Error taxonomy shared by the backend and the gadgets."""


class GadgetError(Exception):
    """Base class for constraint-system and gadget failures."""


class AllocationFailure(GadgetError):
    """The constraint system ran out of multiplier capacity."""


class AssignmentError(GadgetError):
    """A wire's assignment does not match the constraint system's role.

    Raised for a prover wire without a value, a verifier wire carrying one, or
    an allocated scalar/quantity built for the other side.
    """


class ConstraintSystemError(GadgetError):
    """Emission on a sealed, aborted, or foreign-thread constraint system."""


class MalformedCircuitTable(GadgetError, ValueError):
    """A circuit description table could not be decoded.

    Attributes:
        position: Token index (cursor) at which decoding failed
    """

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at token {position})")
        self.position = position


class ProofConstructionFailure(GadgetError):
    """The prover could not produce a proof."""


class ProofVerificationFailure(GadgetError):
    """The verifier rejected a proof."""
