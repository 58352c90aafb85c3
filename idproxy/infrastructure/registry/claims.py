"""In-memory claim registry: issuer -> subject -> key -> value attestations."""

import logging

from idproxy.domain.shared.error import TargetError
from idproxy.domain.shared.model.call import CallContext
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.target.base import Target, external

logger = logging.getLogger(__name__)

ClaimKey = tuple[Address, Address, str]


class ClaimRegistry(Target):
    """Generic attestation store. The sender of `set_claim` is the issuer.

    Has no coupling to identities or managers; an identity uses it like any
    other target.
    """

    def __init__(self, address: Address | None = None) -> None:
        super().__init__(address)
        self._claims: dict[ClaimKey, str] = {}

    def get(self, issuer: Address, subject: Address, key: str) -> str:
        return self._claims.get((issuer, subject, key), "")

    @external
    def set_claim(self, ctx: CallContext, subject: str, key: str, value: str) -> None:
        self._claims[(ctx.sender, Address(subject), key)] = value
        logger.info("Claim set: issuer=%s subject=%s key=%s", ctx.sender, subject, key)

    @external
    def get_claim(self, ctx: CallContext, issuer: str, subject: str, key: str) -> str:
        return self.get(Address(issuer), Address(subject), key)

    @external
    def remove_claim(self, ctx: CallContext, issuer: str, subject: str, key: str) -> None:
        issuer_address, subject_address = Address(issuer), Address(subject)
        if ctx.sender not in (issuer_address, subject_address):
            raise TargetError(
                "Only the issuer or the subject may remove a claim",
                code="not_claim_party",
            )
        self._claims.pop((issuer_address, subject_address, key), None)
        logger.info("Claim removed: issuer=%s subject=%s key=%s", issuer, subject, key)
