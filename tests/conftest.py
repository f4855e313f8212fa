"""
Test bootstrap:
- Make src/ and the test helpers importable at collect time
- Provide deterministic seeds and keyrings shared across test modules
"""
import sys
import pathlib
import pytest

TESTS = pathlib.Path(__file__).resolve().parent
SRC = TESTS.parent / "src"

for p in (SRC, TESTS):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers import TEST_MNEMONIC, ENTROPY_SEED_A, ENTROPY_SEED_B  # noqa: E402


@pytest.fixture(scope="session")
def mnemonic_seed():
    """64-byte BIP39 seed for the test phrase."""
    from mnemonic import Mnemonic
    return Mnemonic.to_seed(TEST_MNEMONIC)


@pytest.fixture(scope="session")
def keyring1(mnemonic_seed):
    """Keyring built from the mnemonic seed."""
    from hdkeyring import Keyring
    return Keyring(mnemonic_seed)


@pytest.fixture(scope="session")
def keyring2():
    """Keyring built from a 0x hex entropy seed."""
    from hdkeyring import Keyring
    return Keyring(ENTROPY_SEED_A)


@pytest.fixture(scope="session")
def keyring3():
    """Second keyring from a different hex seed."""
    from hdkeyring import Keyring
    return Keyring(ENTROPY_SEED_B)


@pytest.fixture
def curve():
    """Default secp256k1 context."""
    from hdkeyring.crypto import SECP256K1_CONTEXT
    return SECP256K1_CONTEXT
