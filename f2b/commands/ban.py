#!/usr/bin/env python3

"""Ban addresses in a jail"""

import click

from f2b.commands.common import complete_jail, fail, get_client, load_jails
from f2b.lib.errors import F2bError
from f2b.lib.report import validate_jail


@click.command()
@click.argument("jail", shell_complete=complete_jail)
@click.argument("ips", metavar="IP...", nargs=-1, required=True)
def ban(jail, ips):
    """
    🔨 Ban one or more IPs in JAIL

    \b
    Examples:
        f2b ban sshd 192.0.2.7
        f2b ban recidive 192.0.2.7 198.51.100.3
    """
    client = get_client()
    try:
        validate_jail(jail, load_jails(client))
        for ip in ips:
            client.ban(jail, ip)
            click.echo(f"Banned {ip} in {jail}")
    except F2bError as e:
        fail(e)
