"""Ed25519 signing and signer recovery for signed call authorizations.

Ed25519 signatures do not allow recovering the public key, so a signature
carries it: ``verify_key (32 bytes) || signature (64 bytes)``. Recovery
verifies the signature against the embedded key and returns the address
derived from that key. A signature made for a different message (another
nonce, manager or call) fails verification instead of recovering a
different principal.
"""

import logging

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import SigningKey, VerifyKey

from idproxy.domain.manager.model.encoding import signed_call_digest, signing_payload
from idproxy.domain.manager.port.signature import SignatureVerifier
from idproxy.domain.shared.error import InvalidSignatureError, ValidationError
from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address

logger = logging.getLogger(__name__)

PUBLIC_KEY_BYTES = 32
RAW_SIGNATURE_BYTES = 64
SIGNATURE_BYTES = PUBLIC_KEY_BYTES + RAW_SIGNATURE_BYTES
DIGEST_BYTES = 32


class Signer:
    """A principal's signing key."""

    def __init__(self, signing_key: SigningKey) -> None:
        self._signing_key = signing_key
        self._verify_key_bytes = bytes(signing_key.verify_key)
        self.address = Address.from_public_key(self._verify_key_bytes)

    @classmethod
    def generate(cls) -> "Signer":
        return cls(SigningKey.generate())

    @classmethod
    def from_seed(cls, seed_hex: str) -> "Signer":
        try:
            seed = bytes.fromhex(seed_hex.removeprefix("0x"))
        except ValueError as e:
            raise ValidationError("Seed must be hex-encoded", field="seed") from e
        if len(seed) != 32:
            raise ValidationError(f"Seed must be 32 bytes, got {len(seed)}", field="seed")
        return cls(SigningKey(seed))

    @property
    def seed_hex(self) -> str:
        return bytes(self._signing_key).hex()

    @property
    def public_key(self) -> bytes:
        return self._verify_key_bytes

    def sign_digest(self, digest: bytes) -> bytes:
        """Sign a 32-byte digest, returning ``verify_key || signature``."""
        if len(digest) != DIGEST_BYTES:
            raise ValidationError(f"Digest must be {DIGEST_BYTES} bytes", field="digest")
        signed = self._signing_key.sign(signing_payload(digest))
        return self._verify_key_bytes + signed.signature

    def sign_call(self, manager: Address, call: Call, nonce: int) -> bytes:
        """Authorize `call` through `manager` at `nonce`."""
        return self.sign_digest(signed_call_digest(manager, call, nonce))


class Ed25519SignatureVerifier(SignatureVerifier):
    def recover(self, digest: bytes, signature: bytes) -> Address:
        if len(signature) != SIGNATURE_BYTES:
            raise InvalidSignatureError(
                f"Signature must be {SIGNATURE_BYTES} bytes, got {len(signature)}",
                code="malformed_signature",
            )

        public_key = signature[:PUBLIC_KEY_BYTES]
        raw_signature = signature[PUBLIC_KEY_BYTES:]
        try:
            VerifyKey(public_key).verify(signing_payload(digest), raw_signature)
        except BadSignatureError as e:
            raise InvalidSignatureError("Signature does not match the authorized call") from e
        except CryptoError as e:
            # Invalid curve points and similar malformed keys
            raise InvalidSignatureError(
                "Signature carries an invalid public key", code="malformed_signature"
            ) from e

        return Address.from_public_key(public_key)
