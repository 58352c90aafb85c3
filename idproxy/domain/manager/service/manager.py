"""IdentityManager service: role administration and brokered execution.

Two ways to have the managed identity forward a call:

- ``execute``: the caller authenticates by being the caller. Its stored
  role must be ACTION.
- ``execute_signed``: anyone relays a signature over
  ``(manager, target, value, data, nonce)``. The recovered signer's stored
  role must be ACTION; the relayer's role is irrelevant. The nonce is keyed
  by the call fingerprint and is consumed before the call is forwarded, so
  one signature buys exactly one attempt, pass or fail.
"""

import logging
from typing import Any

import logfire

from idproxy.config import ManagerConfig
from idproxy.domain.identity.service.identity import IdentityService
from idproxy.domain.manager.event.events import ManagerCreated, NonceConsumed, RoleChanged
from idproxy.domain.manager.model.encoding import call_fingerprint, signed_call_digest
from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.manager.model.role import Role
from idproxy.domain.manager.port.nonce_repository import NonceRepository
from idproxy.domain.manager.port.repository import ManagerRepository
from idproxy.domain.manager.port.role_repository import RoleRepository
from idproxy.domain.manager.port.signature import SignatureVerifier
from idproxy.domain.shared.error import (
    AuthorizationError,
    ForwardFailedError,
    NotFoundError,
)
from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port.event_bus import EventBus
from idproxy.domain.shared.service import Service

logger = logging.getLogger(__name__)


class IdentityManagerService(Service):
    """Brokers access to managed identities, addressed by manager address."""

    _manager_repo: ManagerRepository
    _role_repo: RoleRepository
    _nonce_repo: NonceRepository
    _identity_service: IdentityService
    _verifier: SignatureVerifier
    _event_bus: EventBus
    _config: ManagerConfig

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def create(self, identity: Address, owner: Address) -> IdentityManager:
        """Create a manager for `identity` with `owner` as its root OWNER.

        Ownership of the identity must be transferred to the manager separately.
        """
        manager = IdentityManager.create(identity)
        self._manager_repo.save(manager)
        self._role_repo.set(manager.address, owner, Role.OWNER)

        logger.info(
            "Manager created: manager=%s identity=%s owner=%s",
            manager.address,
            identity,
            owner,
        )
        self._event_bus.publish(
            ManagerCreated(manager=str(manager.address), identity=str(identity), owner=str(owner))
        )
        return manager

    def get(self, address: Address) -> IdentityManager:
        manager = self._manager_repo.get(address)
        if manager is None:
            raise NotFoundError(f"Manager not found: {address}", code="manager_not_found")
        return manager

    # -------------------------------------------------------------------------
    # Role administration
    # -------------------------------------------------------------------------

    def add_role(self, manager: Address, caller: Address, principal: Address, role: Role) -> None:
        """Set `principal`'s role. `caller` must hold OWNER.

        Any role may be set, including NONE; re-adding overwrites.
        """
        with logfire.span("AddRole", manager=str(manager), principal=str(principal)):
            self.get(manager)
            self._require_role(manager, caller, Role.OWNER, operation="add_role")

            previous = self._role_repo.get(manager, principal)
            self._role_repo.set(manager, principal, role)

            logger.info(
                "Role changed: manager=%s principal=%s %s -> %s by=%s",
                manager,
                principal,
                previous.name,
                role.name,
                caller,
            )
            self._event_bus.publish(
                RoleChanged(
                    manager=str(manager),
                    principal=str(principal),
                    previous_role=previous.name,
                    role=role.name,
                    changed_by=str(caller),
                )
            )

    def remove_role(self, manager: Address, caller: Address, principal: Address) -> None:
        """Clear `principal`'s role. `caller` must hold OWNER."""
        self.add_role(manager, caller, principal, Role.NONE)

    def has_role(self, manager: Address, principal: Address, role: Role) -> bool:
        """Exact-match role check. Open to anyone."""
        return self._role_repo.get(manager, principal) == role

    def get_role(self, manager: Address, principal: Address) -> Role:
        return self._role_repo.get(manager, principal)

    def list_roles(self, manager: Address) -> dict[Address, Role]:
        return self._role_repo.roles(manager)

    # -------------------------------------------------------------------------
    # Nonces
    # -------------------------------------------------------------------------

    def get_nonce(self, manager: Address, call: Call) -> int:
        """Nonce a signer must sign over for `call` right now (0 if never used)."""
        return self._nonce_repo.get(manager, call_fingerprint(call))

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(self, manager: Address, caller: Address, call: Call) -> Any:
        """Forward `call` through the managed identity on behalf of `caller`.

        Raises:
            AuthorizationError: `caller` does not hold ACTION.
            ForwardFailedError: the identity refused (manager is not its owner)
                or the target call failed.
        """
        with logfire.span("ManagerExecute", manager=str(manager), target=str(call.target)):
            record = self.get(manager)
            self._require_executor(manager, caller, operation="execute")
            return self._forward(record, call)

    def execute_signed(
        self,
        manager: Address,
        relayer: Address,
        call: Call,
        signature: bytes,
    ) -> Any:
        """Forward `call` on the strength of a signature from an ACTION principal.

        The signature covers ``(manager, target, value, data, nonce)`` where
        nonce is the current counter for the call's fingerprint. Once the
        signer is authorized the nonce is consumed, even if the forward then
        fails, so resubmitting the same signature no longer verifies.

        Raises:
            InvalidSignatureError: the signature does not verify at the current nonce
                (malformed, wrong message, or already spent).
            AuthorizationError: the signer does not hold ACTION, or a concurrent
                request consumed the nonce first.
            ForwardFailedError: the forward failed after the nonce was consumed.
        """
        with logfire.span("ManagerExecuteSigned", manager=str(manager), relayer=str(relayer)):
            record = self.get(manager)

            fingerprint = call_fingerprint(call)
            nonce = self._nonce_repo.get(manager, fingerprint)
            digest = signed_call_digest(manager, call, nonce)

            try:
                signer = self._verifier.recover(digest, signature)
            except AuthorizationError:
                logger.warning(
                    "Signed execution rejected: manager=%s relayer=%s nonce=%d reason=invalid_signature",
                    manager,
                    relayer,
                    nonce,
                )
                raise

            self._require_executor(manager, signer, operation="execute_signed")

            if not self._nonce_repo.advance(manager, fingerprint, nonce):
                logger.warning(
                    "Signed execution rejected: manager=%s signer=%s nonce=%d reason=nonce_consumed",
                    manager,
                    signer,
                    nonce,
                )
                raise AuthorizationError(
                    f"Nonce {nonce} for this call was consumed concurrently",
                    code="nonce_consumed",
                )

            logfire.info("Signed authorization consumed", manager=str(manager), nonce=nonce)

            # Subscribers are told only once the forward has been attempted
            try:
                return self._forward(record, call)
            finally:
                self._event_bus.publish(
                    NonceConsumed(
                        manager=str(manager),
                        fingerprint=fingerprint.hex(),
                        nonce=nonce,
                        signer=str(signer),
                        relayer=str(relayer),
                    )
                )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_role(
        self,
        manager: Address,
        principal: Address,
        role: Role,
        *,
        operation: str,
    ) -> None:
        stored = self._role_repo.get(manager, principal)
        if stored != role:
            logger.warning(
                "Authorization denied: manager=%s principal=%s operation=%s role=%s required=%s",
                manager,
                principal,
                operation,
                stored.name,
                role.name,
            )
            raise AuthorizationError(
                f"Access denied: {operation} requires role {role.name}",
                code="access_denied",
            )
        logger.info(
            "Authorization allowed: manager=%s principal=%s operation=%s",
            manager,
            principal,
            operation,
        )

    def _require_executor(self, manager: Address, principal: Address, *, operation: str) -> None:
        """ACTION is required; OWNER passes too only under `owner_may_execute`."""
        if self._config.owner_may_execute and self._role_repo.get(manager, principal) == Role.OWNER:
            logger.info(
                "Authorization allowed: manager=%s principal=%s operation=%s (owner policy)",
                manager,
                principal,
                operation,
            )
            return
        self._require_role(manager, principal, Role.ACTION, operation=operation)

    def _forward(self, manager: IdentityManager, call: Call) -> Any:
        try:
            return self._identity_service.execute(manager.identity, manager.address, call)
        except (AuthorizationError, NotFoundError) as e:
            # The identity refused the manager itself: not (or no longer) its owner.
            raise ForwardFailedError(
                f"Identity {manager.identity} refused manager {manager.address}: {e.message}"
            ) from e
