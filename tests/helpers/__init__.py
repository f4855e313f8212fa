"""
Shared test constants.
"""

TEST_MNEMONIC = "clay rubber drama brush salute cream nerve wear stuff sentence trade conduct"
ENTROPY_SEED_A = "0xf0e4c2f76c58916ec258f246851bea091d14d4247a2fc3e18694461b1816e13b"
ENTROPY_SEED_B = "0x24a0bc3a2a1d1404c0ab24bef9bb0618938ee892fbf62f63f82f015eddf1729e"
TEST_MESSAGE = "Very secret test message"

__all__ = ["TEST_MNEMONIC", "ENTROPY_SEED_A", "ENTROPY_SEED_B", "TEST_MESSAGE"]
