#!/usr/bin/env python3

"""Reload daemon configuration"""

import click

from f2b.commands.common import complete_jail, fail, get_client, load_jails
from f2b.lib.errors import F2bError
from f2b.lib.report import validate_jail


@click.command()
@click.argument("jail", required=False, shell_complete=complete_jail)
def reload(jail):
    """
    🔄 Reload configuration [JAIL]

    \b
    Examples:
        f2b reload          # Whole daemon
        f2b reload sshd     # Single jail
    """
    client = get_client()
    try:
        if jail:
            validate_jail(jail, load_jails(client))
        client.reload(jail)
    except F2bError as e:
        fail(e)
    click.echo(f"Reloaded {jail}" if jail else "Reloaded fail2ban")
