#!/usr/bin/env python3

"""
f2b - shorthand CLI for fail2ban

Entry point: builds the click group and registers every subcommand.
"""

import click

from f2b import __version__
from f2b.commands.ban import ban
from f2b.commands.banned import banned
from f2b.commands.jails import jails
from f2b.commands.logs import logs
from f2b.commands.ping import ping
from f2b.commands.regex import regex
from f2b.commands.reload import reload
from f2b.commands.service import service
from f2b.commands.status import status
from f2b.commands.unban import unban
from f2b.lib.logging_config import setup_logging


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__, prog_name="f2b")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def cli(verbose):
    """f2b - Shorthand CLI for fail2ban

    Wraps fail2ban-client, fail2ban-regex and systemctl with short
    subcommands and readable output.

    \b
    Examples:
        f2b jails                    # List jails
        f2b banned                   # Banned IPs with remaining time
        f2b ban sshd 192.0.2.7       # Ban an address
        f2b unban 192.0.2.7          # Unban everywhere
        f2b logs -f -j sshd          # Follow sshd log events
    """
    setup_logging("DEBUG" if verbose else None)


cli.add_command(jails)
cli.add_command(status)
cli.add_command(banned)
cli.add_command(ban)
cli.add_command(unban)
cli.add_command(logs)
cli.add_command(regex)
cli.add_command(service)
cli.add_command(reload)
cli.add_command(ping)


def main():
    cli()


if __name__ == "__main__":
    main()
