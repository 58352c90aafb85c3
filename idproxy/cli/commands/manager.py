"""Read manager state from the configured database."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

import cyclopts

from idproxy.application.di import create_container
from idproxy.cli.console import console
from idproxy.cli.util import parse_call
from idproxy.config import Config
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.model.value import Address

app = cyclopts.App(name="manager", help="Inspect identity managers")


@contextmanager
def _manager_service() -> Iterator[IdentityManagerService]:
    config = Config()
    if not config.database.is_persistent:
        console.error(
            "No database configured",
            hint="Set IDPROXY_DATABASE__URL, e.g. sqlite:///~/.idproxy/state.db",
        )
        sys.exit(1)

    container = create_container(config)
    try:
        yield container.get(IdentityManagerService)
    finally:
        container.close()


@app.command
def nonce(manager: str, *, target: str, value: int = 0, data: str = "") -> None:
    """Print the nonce a signer must sign over for a call.

    Args:
        manager: Manager address.
        target: Target address.
        value: Value carried by the call.
        data: Hex-encoded call data.
    """
    call = parse_call(target, value, data)
    with _manager_service() as service:
        console.value(str(service.get_nonce(Address.parse(manager), call)))


@app.command
def role(manager: str, principal: str) -> None:
    """Print the role a principal holds in a manager.

    Args:
        manager: Manager address.
        principal: Principal address.
    """
    with _manager_service() as service:
        stored = service.get_role(Address.parse(manager), Address.parse(principal))
        console.value(stored.name)


@app.command
def roles(manager: str) -> None:
    """List every principal holding a role in a manager.

    Args:
        manager: Manager address.
    """
    with _manager_service() as service:
        entries = service.list_roles(Address.parse(manager))
    rows = [
        {"principal": str(p), "role": r.name}
        for p, r in sorted(entries.items(), key=lambda item: str(item[0]))
    ]
    if not rows:
        console.info("No roles assigned")
        return
    console.table(rows, [("principal", "Principal"), ("role", "Role")])
