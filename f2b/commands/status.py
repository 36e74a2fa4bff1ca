#!/usr/bin/env python3

"""Show daemon or jail status"""

import click

from f2b.commands.common import complete_jail, fail, get_client, load_jails
from f2b.lib.errors import F2bError
from f2b.lib.report import validate_jail


@click.command()
@click.argument("jail", required=False, shell_complete=complete_jail)
def status(jail):
    """
    📊 Show status [JAIL]

    Without JAIL shows the daemon overview; with JAIL shows failure and ban
    counters plus the banned address list for that jail.

    \b
    Examples:
        f2b status          # Daemon overview
        f2b status sshd     # Single jail
    """
    client = get_client()
    try:
        if jail:
            validate_jail(jail, load_jails(client))
        click.echo(client.status(jail).rstrip("\n"))
    except F2bError as e:
        fail(e)
