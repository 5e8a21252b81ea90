"""
Pytest configuration for r1cs_gadgets tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so the package imports without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from r1cs_gadgets.backend import Prover, Verifier  # noqa: E402
from r1cs_gadgets.primitives.transcript import Transcript  # noqa: E402

TEST_LABEL = b"r1cs-gadgets-test"


@pytest.fixture
def prover():
    return Prover(Transcript(TEST_LABEL))


@pytest.fixture
def verifier():
    return Verifier(Transcript(TEST_LABEL))


@pytest.fixture
def fixed_blinding():
    """Deterministic blinding so commitments are reproducible across tests."""
    return 0x1234_5678_9ABC_DEF0
