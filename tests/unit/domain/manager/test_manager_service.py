import pytest

from idproxy.config import ManagerConfig
from idproxy.domain.identity.service.identity import IdentityService
from idproxy.domain.manager.event import ManagerCreated, RoleChanged
from idproxy.domain.manager.model import IdentityManager, Role
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.error import AuthorizationError, ForwardFailedError, NotFoundError
from idproxy.domain.shared.model.call import Call, encode_call
from idproxy.domain.shared.model.value import Address
from tests.fakes import Counter, RecordingEventBus


class TestCreate:
    def test_owner_gets_owner_role(
        self,
        manager_service: IdentityManagerService,
        event_bus: RecordingEventBus,
        owner: Address,
    ) -> None:
        identity = Address.generate()
        manager = manager_service.create(identity, owner)

        assert manager.identity == identity
        assert manager_service.get_role(manager.address, owner) == Role.OWNER
        [event] = event_bus.of_type(ManagerCreated)
        assert event.owner == str(owner)

    def test_get_unknown_manager(self, manager_service: IdentityManagerService) -> None:
        with pytest.raises(NotFoundError) as exc:
            manager_service.get(Address.generate())
        assert exc.value.code == "manager_not_found"


class TestRoles:
    def test_unknown_principal_has_none(
        self, manager_service: IdentityManagerService, manager: IdentityManager
    ) -> None:
        assert manager_service.get_role(manager.address, Address.generate()) == Role.NONE

    def test_owner_adds_and_removes_roles(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        owner: Address,
    ) -> None:
        principal = Address.generate()

        manager_service.add_role(manager.address, owner, principal, Role.ACTION)
        assert manager_service.has_role(manager.address, principal, Role.ACTION)

        manager_service.remove_role(manager.address, owner, principal)
        assert manager_service.get_role(manager.address, principal) == Role.NONE
        assert principal not in manager_service.list_roles(manager.address)

    def test_readding_overwrites(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        owner: Address,
    ) -> None:
        principal = Address.generate()
        manager_service.add_role(manager.address, owner, principal, Role.ACTION)
        manager_service.add_role(manager.address, owner, principal, Role.OWNER)

        assert manager_service.get_role(manager.address, principal) == Role.OWNER
        assert not manager_service.has_role(manager.address, principal, Role.ACTION)

    def test_role_match_is_exact(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        owner: Address,
    ) -> None:
        assert manager_service.has_role(manager.address, owner, Role.OWNER)
        assert not manager_service.has_role(manager.address, owner, Role.ACTION)

    @pytest.mark.parametrize("caller_role", [Role.NONE, Role.ACTION])
    def test_non_owner_cannot_change_roles(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        owner: Address,
        caller_role: Role,
    ) -> None:
        caller, principal = Address.generate(), Address.generate()
        manager_service.add_role(manager.address, owner, caller, caller_role)
        before = manager_service.list_roles(manager.address)

        with pytest.raises(AuthorizationError) as exc:
            manager_service.add_role(manager.address, caller, principal, Role.OWNER)
        assert exc.value.code == "access_denied"
        with pytest.raises(AuthorizationError):
            manager_service.remove_role(manager.address, caller, owner)

        assert manager_service.list_roles(manager.address) == before

    def test_owner_can_remove_itself(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        owner: Address,
    ) -> None:
        manager_service.remove_role(manager.address, owner, owner)

        with pytest.raises(AuthorizationError):
            manager_service.add_role(manager.address, owner, owner, Role.OWNER)

    def test_role_change_publishes_event(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        event_bus: RecordingEventBus,
        owner: Address,
    ) -> None:
        principal = Address.generate()
        manager_service.add_role(manager.address, owner, principal, Role.ACTION)

        [event] = event_bus.of_type(RoleChanged)
        assert event.previous_role == "NONE"
        assert event.role == "ACTION"
        assert event.changed_by == str(owner)


class TestExecute:
    def test_action_principal_executes(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
        owner: Address,
    ) -> None:
        principal = Address.generate()
        manager_service.add_role(manager.address, owner, principal, Role.ACTION)

        call = Call(target=counter.address, data=encode_call("increment"))
        assert manager_service.execute(manager.address, principal, call) == 1
        assert counter.calls[0].sender == manager.identity

    def test_principal_without_role_is_unauthorized(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
    ) -> None:
        call = Call(target=counter.address, data=encode_call("increment"))
        with pytest.raises(AuthorizationError):
            manager_service.execute(manager.address, Address.generate(), call)
        assert counter.count == 0

    def test_owner_cannot_execute_by_default(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
        owner: Address,
    ) -> None:
        call = Call(target=counter.address, data=encode_call("increment"))
        with pytest.raises(AuthorizationError):
            manager_service.execute(manager.address, owner, call)
        assert counter.count == 0

    def test_manager_that_does_not_own_identity_fails_forward(
        self,
        manager_service: IdentityManagerService,
        identity_service: IdentityService,
        counter: Counter,
        owner: Address,
    ) -> None:
        identity = identity_service.create(owner)
        manager = manager_service.create(identity.address, owner)
        principal = Address.generate()
        manager_service.add_role(manager.address, owner, principal, Role.ACTION)

        call = Call(target=counter.address, data=encode_call("increment"))
        with pytest.raises(ForwardFailedError) as exc:
            manager_service.execute(manager.address, principal, call)
        assert isinstance(exc.value.__cause__, AuthorizationError)
        assert counter.count == 0

    def test_target_failure_surfaces_as_forward_failed(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
        owner: Address,
    ) -> None:
        principal = Address.generate()
        manager_service.add_role(manager.address, owner, principal, Role.ACTION)

        with pytest.raises(ForwardFailedError):
            manager_service.execute(
                manager.address, principal, Call(target=counter.address, data=encode_call("fail"))
            )


class TestOwnerMayExecute:
    @pytest.fixture
    def manager_config(self) -> ManagerConfig:
        return ManagerConfig(owner_may_execute=True)

    def test_owner_executes_under_policy(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
        owner: Address,
    ) -> None:
        call = Call(target=counter.address, data=encode_call("increment"))
        assert manager_service.execute(manager.address, owner, call) == 1

    def test_principal_without_role_still_refused(
        self,
        manager_service: IdentityManagerService,
        manager: IdentityManager,
        counter: Counter,
    ) -> None:
        call = Call(target=counter.address, data=encode_call("increment"))
        with pytest.raises(AuthorizationError):
            manager_service.execute(manager.address, Address.generate(), call)
