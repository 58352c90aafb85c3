"""Offline helpers for building and signing calls."""

import cyclopts

from idproxy.cli.console import console
from idproxy.cli.util import parse_arg, parse_call
from idproxy.domain.manager.model.encoding import call_fingerprint
from idproxy.domain.shared.error import ValidationError
from idproxy.domain.shared.model.call import encode_call
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.crypto.ed25519 import Signer

app = cyclopts.App(name="call", help="Build, fingerprint and sign calls")


@app.command
def encode(method: str, *args: str) -> None:
    """Print call data for a target method.

    Args:
        method: External method name on the target.
        args: Arguments; JSON literals are decoded, anything else is passed as a string.
    """
    data = encode_call(method, *[parse_arg(a) for a in args])
    console.value(data.hex())


@app.command
def fingerprint(*, target: str, value: int = 0, data: str = "") -> None:
    """Print the fingerprint that keys the nonce of a call.

    Args:
        target: Target address.
        value: Value carried by the call.
        data: Hex-encoded call data.
    """
    console.value(call_fingerprint(parse_call(target, value, data)).hex())


@app.command
def sign(
    *,
    seed: str,
    manager: str,
    target: str,
    nonce: int,
    value: int = 0,
    data: str = "",
) -> None:
    """Sign a call for relayed execution through a manager.

    Fetch the current nonce first (`idproxy manager nonce`); a signature is
    only valid at the nonce it was made for.

    Args:
        seed: Hex-encoded 32-byte seed of the signing principal.
        manager: Manager address.
        target: Target address.
        nonce: Current nonce for the call.
        value: Value carried by the call.
        data: Hex-encoded call data.
    """
    if nonce < 0:
        raise ValidationError("nonce must be >= 0", field="nonce")
    signer = Signer.from_seed(seed)
    call = parse_call(target, value, data)
    signature = signer.sign_call(Address.parse(manager), call, nonce)
    console.info(f"signer {signer.address}, nonce {nonce}")
    console.value(signature.hex())
