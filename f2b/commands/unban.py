#!/usr/bin/env python3

"""Unban addresses"""

import click

from f2b.commands.common import complete_jail, fail, get_client, load_jails
from f2b.lib.errors import F2bError
from f2b.lib.report import validate_jail


@click.command()
@click.argument("ips", metavar="[IP]...", nargs=-1)
@click.option("-j", "--jail", shell_complete=complete_jail, help="Only unban from this jail")
@click.option("--all", "unban_everything", is_flag=True, help="Unban every IP in every jail")
def unban(ips, jail, unban_everything):
    """
    🔓 Unban IPs from one jail or all jails [IP]...

    \b
    Examples:
        f2b unban 192.0.2.7             # From every jail
        f2b unban 192.0.2.7 -j sshd     # From sshd only
        f2b unban --all                 # Flush all bans
    """
    if unban_everything and (ips or jail):
        fail("--all cannot be combined with IPs or --jail")
    if not unban_everything and not ips:
        fail("Give at least one IP, or --all")

    client = get_client()
    try:
        if unban_everything:
            client.unban_all()
            click.echo("Unbanned all IPs")
            return

        if jail:
            validate_jail(jail, load_jails(client))
        for ip in ips:
            client.unban(ip, jail)
            click.echo(f"Unbanned {ip}" + (f" from {jail}" if jail else " from all jails"))
    except F2bError as e:
        fail(e)
