"""Signing key commands."""

import cyclopts

from idproxy.cli.console import console
from idproxy.infrastructure.crypto.ed25519 import Signer

app = cyclopts.App(name="keys", help="Signing keys for principals")


@app.command
def new() -> None:
    """Generate a new signing key and print its address and seed.

    Keep the seed secret: it is the only credential needed to sign calls
    for the address.
    """
    signer = Signer.generate()
    console.panel(
        f"address: {signer.address}\nseed:    {signer.seed_hex}",
        title="New signing key",
    )


@app.command
def show(seed: str) -> None:
    """Print the address belonging to a seed.

    Args:
        seed: Hex-encoded 32-byte seed.
    """
    console.value(str(Signer.from_seed(seed).address))
