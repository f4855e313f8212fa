r"""
Keyring core.

Owns one master seed, derives the root key bundle eagerly and space bundles
lazily, and exposes encryption, decryption and signing bound to them.

Paths:
    root store:  m/51073068'/0'/0'/0'/0'/0'/0'/0'/0'/0'
    space:       m/51073068'/0'/<encode_space(name)>
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, Optional, Tuple, Union

from mnemonic import Mnemonic

from ..crypto.hash_utils import sha256_hex
from ..crypto.hd import KeyNode
from ..crypto.secp256k1 import CurveContext, SECP256K1_CONTEXT
from ..runtime.codec import BytesLike, encode_base64, ensure_0x, hex_to_bytes
from ..runtime.errors import (
    EncodingError, ErrorCode, InvalidSeedError, MisuseError,
)
from ..signers.eth import ManagementWallet
from ..signers.jwt import JWTSigner
from . import auth_secret
from .bundle import KeyBundle, derive_bundle
from .envelope import Cleartext, open_asymmetric, open_symmetric, seal_asymmetric, seal_symmetric
from .options import (
    AsymEncryptOptions, DecryptOptions, EncryptedMessage, PublicKeyOptions, PublicKeys,
    SymEncryptOptions,
)
from .paths import BASE_SEGMENTS, ROOT_STORE_SEGMENTS, encode_space

logger = logging.getLogger(__name__)

Seed = Union[str, bytes, bytearray]


def seed_to_bytes(seed: Seed) -> bytes:
    """
    Normalize a seed to bytes.

    Hex strings are accepted with or without the 0x prefix.

    Raises:
        InvalidSeedError: If no seed is given or it is not bytes / hex
    """
    if seed is None:
        raise InvalidSeedError("No seed supplied")
    if isinstance(seed, str):
        if not seed or seed == "0x":
            raise InvalidSeedError("No seed supplied")
        try:
            return hex_to_bytes(ensure_0x(seed))
        except EncodingError as e:
            raise InvalidSeedError("Seed string is not hex", cause=e)
    if isinstance(seed, (bytes, bytearray, memoryview)):
        if len(seed) == 0:
            raise InvalidSeedError("No seed supplied")
        return bytes(seed)
    raise InvalidSeedError(f"Unsupported seed type: {type(seed).__name__}")


class Keyring:
    """
    Deterministic keyring over one master seed.

    Two keyrings built from the same seed produce identical root and space
    keys. Space bundles are cached for the keyring's lifetime.
    """

    def __init__(self, seed: Seed, curve: CurveContext = SECP256K1_CONTEXT):
        """
        Initialize keyring.

        Args:
            seed: 16-64 byte seed as bytes or hex string
            curve: Curve context for secp256k1 work

        Raises:
            InvalidSeedError: If the seed is missing or malformed
        """
        seed_bytes = seed_to_bytes(seed)
        self._seed = seed
        self._curve = curve
        self._base_node = KeyNode.from_seed(seed_bytes, curve).derive_path(BASE_SEGMENTS)
        self._root_keys = derive_bundle(self._base_node.derive_path(ROOT_STORE_SEGMENTS), include_management=True)
        self._space_keys: Dict[str, KeyBundle] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_mnemonic(cls, phrase: str, passphrase: str = "",
                      curve: CurveContext = SECP256K1_CONTEXT) -> Keyring:
        """
        Build a keyring from a BIP39 phrase.

        The 64-byte seed is PBKDF2-HMAC-SHA512 of the phrase; the phrase is not
        checked against a word list.
        """
        if not phrase or not phrase.strip():
            raise InvalidSeedError("No mnemonic supplied", code=ErrorCode.INVALID_MNEMONIC)
        return cls(Mnemonic.to_seed(phrase, passphrase=passphrase), curve)

    # ---- Bundles ---------------------------------------------------------

    def _derive_space_keys(self, space: str) -> KeyBundle:
        node = self._base_node.derive_path(encode_space(space))
        return derive_bundle(node, include_management=False)

    def get_bundle(self, space: Optional[str] = None) -> KeyBundle:
        """
        Return the bundle for a space, or the root bundle when space is None.

        Raises:
            MisuseError: If space is an empty string
        """
        if space is None:
            return self._root_keys
        if not space:
            raise MisuseError("Space name must be non-empty")

        bundle = self._space_keys.get(space)
        if bundle is not None:
            return bundle

        with self._lock:
            bundle = self._space_keys.get(space)
            if bundle is None:
                bundle = self._derive_space_keys(space)
                self._space_keys[space] = bundle
                logger.debug(f"Derived key bundle for space {space!r}")
        return bundle

    def cached_spaces(self) -> Tuple[str, ...]:
        """Names of spaces whose bundles have been derived."""
        with self._lock:
            return tuple(self._space_keys)

    # ---- Public keys -----------------------------------------------------

    def get_public_keys(self, options: Optional[PublicKeyOptions] = None) -> PublicKeys:
        """
        Export the public keys of a bundle.

        Args:
            options: space, uncompressed, mgmt_pub

        Returns:
            PublicKeys; management_key is None for spaces
        """
        opts = options or PublicKeyOptions()
        keys = self.get_bundle(opts.space)

        signing_key = keys.signing_key.public_key
        if opts.uncompressed:
            signing_key = self._curve.decompress(signing_key)

        management_key = None
        if opts.space is None:
            if opts.mgmt_pub:
                management_key = keys.management_key.public_key.hex()
            else:
                management_key = self.management_wallet().address

        return PublicKeys(
            signing_key=signing_key.hex(),
            management_key=management_key,
            asym_encryption_key=encode_base64(keys.asym_encryption_key.public_key_bytes()),
        )

    # ---- Encryption ------------------------------------------------------

    def asym_encrypt(self, message: Union[str, BytesLike], to_public: str,
                     options: Optional[AsymEncryptOptions] = None) -> EncryptedMessage:
        """
        Encrypt to a recipient's base64 box public key.

        A new ephemeral key pair is generated for every call.
        """
        opts = options or AsymEncryptOptions()
        return seal_asymmetric(message, to_public, opts.nonce)

    def asym_decrypt(self, ciphertext: str, from_public: str, nonce: str,
                     options: Optional[DecryptOptions] = None) -> Optional[Cleartext]:
        """
        Decrypt a box addressed to this keyring (or one of its spaces).

        Returns:
            Cleartext, or None when the message cannot be authenticated
        """
        opts = options or DecryptOptions()
        key_pair = self.get_bundle(opts.space).asym_encryption_key
        return open_asymmetric(ciphertext, from_public, nonce, key_pair, opts.to_bytes)

    def sym_encrypt(self, message: Union[str, BytesLike],
                    options: Optional[SymEncryptOptions] = None) -> EncryptedMessage:
        """Encrypt with the symmetric key of the root or a space."""
        opts = options or SymEncryptOptions()
        return seal_symmetric(message, self.get_bundle(opts.space).sym_encryption_key, opts.nonce)

    def sym_decrypt(self, ciphertext: str, nonce: str,
                    options: Optional[DecryptOptions] = None) -> Optional[Cleartext]:
        """
        Decrypt with the symmetric key of the root or a space.

        Returns:
            Cleartext, or None when the message cannot be authenticated
        """
        opts = options or DecryptOptions()
        return open_symmetric(ciphertext, nonce, self.get_bundle(opts.space).sym_encryption_key, opts.to_bytes)

    # ---- Signing ---------------------------------------------------------

    def management_wallet(self) -> ManagementWallet:
        """Wallet over the root management key."""
        return ManagementWallet(self._root_keys.management_key.private_key_bytes(), self._curve)

    async def management_personal_sign(self, message: Union[str, BytesLike]) -> str:
        """EIP-191 personal signature with the management key."""
        return await self.management_wallet().sign_message_async(message)

    def get_jwt_signer(self, space: Optional[str] = None, use_management: bool = False) -> JWTSigner:
        """
        Return an async ES256K signer.

        Args:
            space: Space whose signing key is used; None for the root
            use_management: Sign with the root management key

        Raises:
            MisuseError: If the management key is requested for a space
        """
        if use_management and space is not None:
            raise MisuseError("Management key exists only on the root bundle",
                              code=ErrorCode.MANAGEMENT_KEY_UNAVAILABLE, details={"space": space})
        keys = self.get_bundle(space)
        key = keys.management_key if use_management else keys.signing_key
        return JWTSigner(key.private_key_bytes(), self._curve)

    def get_db_salt(self, space: Optional[str] = None) -> str:
        """
        Deterministic salt for namespacing.

        sha256 over the hex private key of the signing key's hardened child 0.
        """
        child = self.get_bundle(space).signing_key.derive_child(0, hardened=True)
        return sha256_hex(child.private_key_bytes().hex())

    # ---- Serialization ---------------------------------------------------

    def serialize(self) -> Seed:
        """Return the seed exactly as given to the constructor."""
        return self._seed

    def __repr__(self) -> str:
        return f"Keyring(spaces={len(self._space_keys)})"

    # ---- Auth secret -----------------------------------------------------

    encrypt_with_auth_secret = staticmethod(auth_secret.encrypt_with_auth_secret)
    decrypt_with_auth_secret = staticmethod(auth_secret.decrypt_with_auth_secret)
    wallet_for_auth_secret = staticmethod(auth_secret.wallet_for_auth_secret)


__all__ = [
    "Seed",
    "seed_to_bytes",
    "Keyring",
]
