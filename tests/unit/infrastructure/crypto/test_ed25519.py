import pytest

from idproxy.domain.manager.model.encoding import signed_call_digest
from idproxy.domain.shared.error import InvalidSignatureError, ValidationError
from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.crypto.ed25519 import (
    SIGNATURE_BYTES,
    Ed25519SignatureVerifier,
    Signer,
)

MANAGER = Address("0x" + "aa" * 20)
CALL = Call(target=Address("0x" + "bb" * 20), value=1, data=b"data")


class TestSigner:
    def test_seed_round_trip(self) -> None:
        signer = Signer.generate()
        restored = Signer.from_seed(signer.seed_hex)
        assert restored.address == signer.address
        assert restored.public_key == signer.public_key

    def test_seed_accepts_0x_prefix(self) -> None:
        signer = Signer.generate()
        assert Signer.from_seed("0x" + signer.seed_hex).address == signer.address

    def test_address_derives_from_public_key(self) -> None:
        signer = Signer.generate()
        assert signer.address == Address.from_public_key(signer.public_key)

    @pytest.mark.parametrize("seed", ["xyz", "00" * 31, "00" * 33])
    def test_rejects_bad_seed(self, seed: str) -> None:
        with pytest.raises(ValidationError):
            Signer.from_seed(seed)

    def test_signature_layout(self) -> None:
        signer = Signer.generate()
        signature = signer.sign_call(MANAGER, CALL, 0)
        assert len(signature) == SIGNATURE_BYTES
        assert signature[:32] == signer.public_key

    def test_rejects_short_digest(self) -> None:
        with pytest.raises(ValidationError):
            Signer.generate().sign_digest(b"short")


class TestEd25519SignatureVerifier:
    @pytest.fixture
    def verifier(self) -> Ed25519SignatureVerifier:
        return Ed25519SignatureVerifier()

    def test_recovers_signer(self, verifier: Ed25519SignatureVerifier) -> None:
        signer = Signer.generate()
        digest = signed_call_digest(MANAGER, CALL, 3)
        assert verifier.recover(digest, signer.sign_digest(digest)) == signer.address

    def test_rejects_other_digest(self, verifier: Ed25519SignatureVerifier) -> None:
        signer = Signer.generate()
        signature = signer.sign_call(MANAGER, CALL, 3)
        with pytest.raises(InvalidSignatureError) as exc:
            verifier.recover(signed_call_digest(MANAGER, CALL, 4), signature)
        assert exc.value.code == "invalid_signature"

    def test_rejects_swapped_public_key(self, verifier: Ed25519SignatureVerifier) -> None:
        signer, impostor = Signer.generate(), Signer.generate()
        digest = signed_call_digest(MANAGER, CALL, 0)
        forged = impostor.public_key + signer.sign_digest(digest)[32:]
        with pytest.raises(InvalidSignatureError):
            verifier.recover(digest, forged)

    def test_rejects_wrong_length(self, verifier: Ed25519SignatureVerifier) -> None:
        with pytest.raises(InvalidSignatureError) as exc:
            verifier.recover(bytes(32), b"\x01" * (SIGNATURE_BYTES - 1))
        assert exc.value.code == "malformed_signature"
