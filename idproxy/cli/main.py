"""Main CLI application using Cyclopts."""

import cyclopts
import logfire

from idproxy.cli.commands import call, keys, manager
from idproxy.cli.console import console
from idproxy.config import Config, configure_logging
from idproxy.domain.shared.error import IdProxyError

app = cyclopts.App(
    name="idproxy",
    help="Identity proxy - keys, signed calls and manager state",
)

app.command(keys.app, name="keys")
app.command(call.app, name="call")
app.command(manager.app, name="manager")


def main() -> None:
    config = Config()
    configure_logging(config.logging)
    # Spans are exported only when LOGFIRE_TOKEN is set
    logfire.configure(send_to_logfire="if-token-present", console=False)
    try:
        app()
    except IdProxyError as e:
        console.error(e.message, hint=f"code: {e.code}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
