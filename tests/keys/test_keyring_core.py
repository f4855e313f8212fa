"""
Keyring construction, bundle caching and public key export tests.
"""

import threading

import pytest
from mnemonic import Mnemonic

from hdkeyring import Keyring, PublicKeyOptions
from hdkeyring.crypto.hd import KeyNode
from hdkeyring.keys.paths import BASE_PATH, ROOT_STORE_PATH, encode_space
from hdkeyring.runtime.codec import decode_base64
from hdkeyring.runtime.errors import InvalidSeedError, MisuseError

from helpers import ENTROPY_SEED_A, ENTROPY_SEED_B, TEST_MNEMONIC


class TestConstruction:
    """Seed handling."""

    @pytest.mark.parametrize("seed", [None, "", b"", "0x"])
    def test_no_seed(self, seed):
        with pytest.raises(InvalidSeedError):
            Keyring(seed)

    def test_seed_too_short(self):
        with pytest.raises(InvalidSeedError):
            Keyring(b"\x01" * 8)

    def test_seed_not_hex(self):
        with pytest.raises(InvalidSeedError):
            Keyring("not a hex seed")

    def test_unsupported_seed_type(self):
        with pytest.raises(InvalidSeedError):
            Keyring(12345)

    def test_hex_prefix_is_optional(self):
        with_prefix = Keyring(ENTROPY_SEED_A)
        without_prefix = Keyring(ENTROPY_SEED_A[2:])
        raw = Keyring(bytes.fromhex(ENTROPY_SEED_A[2:]))
        assert with_prefix.get_public_keys() == without_prefix.get_public_keys() == raw.get_public_keys()

    def test_serialize_returns_seed_unchanged(self, keyring1, keyring2, mnemonic_seed):
        assert keyring1.serialize() == mnemonic_seed
        assert keyring2.serialize() == ENTROPY_SEED_A
        assert Keyring(ENTROPY_SEED_A[2:]).serialize() == ENTROPY_SEED_A[2:]

    def test_serialize_reconstructs(self, keyring2):
        clone = Keyring(keyring2.serialize())
        assert clone.get_public_keys() == keyring2.get_public_keys()

    def test_from_mnemonic(self, keyring1):
        assert Keyring.from_mnemonic(TEST_MNEMONIC).get_public_keys() == keyring1.get_public_keys()

    def test_from_mnemonic_with_passphrase_differs(self, keyring1):
        other = Keyring.from_mnemonic(TEST_MNEMONIC, passphrase="extra")
        assert other.get_public_keys() != keyring1.get_public_keys()

    def test_empty_mnemonic(self):
        with pytest.raises(InvalidSeedError):
            Keyring.from_mnemonic("   ")

    def test_root_keys_follow_fixed_path(self, mnemonic_seed):
        node = KeyNode.from_seed(Mnemonic.to_seed(TEST_MNEMONIC)).derive_path(BASE_PATH + "/" + ROOT_STORE_PATH)
        bundle = Keyring(mnemonic_seed).get_bundle()
        assert bundle.node == node
        assert bundle.signing_key == node.derive_child(0)


class TestBundles:
    """Lazy, cached space bundles."""

    def test_root_bundle_has_management_key(self, keyring1):
        assert keyring1.get_bundle().management_key is not None

    def test_space_bundle_has_no_management_key(self, keyring1):
        assert keyring1.get_bundle("space1").management_key is None

    def test_space_bundle_is_cached(self):
        keyring = Keyring(ENTROPY_SEED_B)
        assert keyring.cached_spaces() == ()
        first = keyring.get_bundle("space1")
        assert keyring.cached_spaces() == ("space1",)
        assert keyring.get_bundle("space1") is first

    def test_space_bundle_is_deterministic_across_instances(self):
        a = Keyring(ENTROPY_SEED_B).get_bundle("shared")
        b = Keyring(ENTROPY_SEED_B).get_bundle("shared")
        assert a.signing_key.private_key == b.signing_key.private_key
        assert a.asym_encryption_key.secret_key == b.asym_encryption_key.secret_key
        assert a.sym_encryption_key == b.sym_encryption_key

    def test_space_node_path(self, keyring2):
        bundle = keyring2.get_bundle("space1")
        assert bundle.node.path[2:] == encode_space("space1")

    def test_spaces_are_isolated(self, keyring1):
        root, s1, s2 = keyring1.get_bundle(), keyring1.get_bundle("space1"), keyring1.get_bundle("space2")
        assert len({root.sym_encryption_key, s1.sym_encryption_key, s2.sym_encryption_key}) == 3
        assert len({root.signing_key.private_key, s1.signing_key.private_key, s2.signing_key.private_key}) == 3

    def test_different_seeds_different_spaces(self, keyring2, keyring3):
        assert keyring2.get_bundle("space1").sym_encryption_key != keyring3.get_bundle("space1").sym_encryption_key

    def test_empty_space_name(self, keyring1):
        with pytest.raises(MisuseError):
            keyring1.get_bundle("")

    def test_concurrent_first_access(self):
        keyring = Keyring(ENTROPY_SEED_A)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(keyring.get_bundle("contended"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert keyring.cached_spaces() == ("contended",)


class TestPublicKeys:
    """Public key export."""

    def test_default_export(self, keyring1):
        keys = keyring1.get_public_keys()
        assert len(keys.signing_key) == 66
        assert keys.signing_key[:2] in ("02", "03")
        assert keys.management_key.startswith("0x") and len(keys.management_key) == 42
        assert len(decode_base64(keys.asym_encryption_key)) == 32

    def test_export_is_stable(self, keyring1, mnemonic_seed):
        again = Keyring(mnemonic_seed)
        for options in (None, PublicKeyOptions(mgmt_pub=True), PublicKeyOptions(uncompressed=True)):
            assert keyring1.get_public_keys(options) == keyring1.get_public_keys(options)
            assert keyring1.get_public_keys(options) == again.get_public_keys(options)

    def test_uncompressed_signing_key(self, keyring1, curve):
        compressed = keyring1.get_public_keys().signing_key
        uncompressed = keyring1.get_public_keys(PublicKeyOptions(uncompressed=True)).signing_key
        assert len(uncompressed) == 130 and uncompressed.startswith("04")
        assert curve.compress(bytes.fromhex(uncompressed)).hex() == compressed

    def test_management_public_key(self, keyring1):
        keys = keyring1.get_public_keys(PublicKeyOptions(mgmt_pub=True))
        assert keys.management_key == keyring1.get_bundle().management_key.public_key.hex()
        assert keys.signing_key == keyring1.get_public_keys().signing_key

    def test_management_address_matches_wallet(self, keyring1):
        assert keyring1.get_public_keys().management_key == keyring1.management_wallet().address

    def test_space_export_has_no_management_key(self, keyring1):
        keys = keyring1.get_public_keys(PublicKeyOptions(space="space1", mgmt_pub=True))
        assert keys.management_key is None
        assert keys.signing_key == keyring1.get_bundle("space1").signing_key.public_key.hex()

    def test_wire_form(self, keyring1):
        wire = keyring1.get_public_keys().to_dict()
        assert set(wire) == {"signingKey", "managementKey", "asymEncryptionKey"}


class TestDbSalt:

    def test_salt_is_deterministic_hex(self, keyring1, mnemonic_seed):
        salt = keyring1.get_db_salt()
        assert len(salt) == 64
        int(salt, 16)
        assert Keyring(mnemonic_seed).get_db_salt() == salt

    def test_salt_differs_per_space(self, keyring1):
        assert len({keyring1.get_db_salt(), keyring1.get_db_salt("space1"), keyring1.get_db_salt("space2")}) == 3

    def test_salt_does_not_reveal_signing_key(self, keyring1):
        bundle = keyring1.get_bundle()
        assert keyring1.get_db_salt() != bundle.signing_key.private_key.hex()
