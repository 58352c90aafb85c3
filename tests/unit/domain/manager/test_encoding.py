import pytest

from idproxy.domain.manager.model.encoding import (
    SIGNED_CALL_PREFIX,
    call_fingerprint,
    signed_call_digest,
    signing_payload,
)
from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address

TARGET = Address("0x" + "11" * 20)
MANAGER = Address("0x" + "22" * 20)


class TestCallFingerprint:
    def test_is_deterministic(self) -> None:
        call = Call(target=TARGET, value=5, data=b"abc")
        assert call_fingerprint(call) == call_fingerprint(Call(target=TARGET, value=5, data=b"abc"))
        assert len(call_fingerprint(call)) == 32

    @pytest.mark.parametrize(
        "other",
        [
            Call(target=Address("0x" + "12" * 20), value=5, data=b"abc"),
            Call(target=TARGET, value=6, data=b"abc"),
            Call(target=TARGET, value=5, data=b"abd"),
            Call(target=TARGET, value=5, data=b"abc\x00"),
        ],
    )
    def test_every_field_contributes(self, other: Call) -> None:
        assert call_fingerprint(Call(target=TARGET, value=5, data=b"abc")) != call_fingerprint(other)

    def test_length_prefix_separates_value_from_data(self) -> None:
        # Without a length prefix, moving a byte between value and data could collide
        a = Call(target=TARGET, value=1, data=b"")
        b = Call(target=TARGET, value=0, data=b"\x01")
        assert call_fingerprint(a) != call_fingerprint(b)


class TestSignedCallDigest:
    def test_binds_manager_and_nonce(self) -> None:
        call = Call(target=TARGET, data=b"x")
        base = signed_call_digest(MANAGER, call, 0)
        assert base == signed_call_digest(MANAGER, call, 0)
        assert base != signed_call_digest(MANAGER, call, 1)
        assert base != signed_call_digest(Address("0x" + "33" * 20), call, 0)

    def test_differs_from_fingerprint(self) -> None:
        call = Call(target=TARGET, data=b"x")
        assert signed_call_digest(MANAGER, call, 0) != call_fingerprint(call)

    def test_rejects_negative_nonce(self) -> None:
        with pytest.raises(ValueError):
            signed_call_digest(MANAGER, Call(target=TARGET), -1)

    def test_signing_payload_is_prefixed(self) -> None:
        digest = bytes(32)
        assert signing_payload(digest) == SIGNED_CALL_PREFIX + digest
