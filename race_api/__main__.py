"""Allow ``python -m race_api``."""

from .adapters.inbound.cli.commands import main

main()
