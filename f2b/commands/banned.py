#!/usr/bin/env python3

"""Report currently banned IPs"""

import logging

import click

from f2b.commands.common import complete_jail, fail, get_client, load_jails
from f2b.lib.errors import F2bError
from f2b.lib.report import build_ban_report, collect_ban_records, validate_jail

logger = logging.getLogger(__name__)


@click.command()
@click.argument("jail_names", metavar="[JAIL]...", nargs=-1, shell_complete=complete_jail)
def banned(jail_names):
    """
    🚫 Show banned IPs with remaining ban time [JAIL]...

    Prints the number of unique banned addresses, the oldest and newest ban,
    and a table with one row per active ban ordered by time until unban.
    Defaults to all jails.

    \b
    Examples:
        f2b banned                # All jails
        f2b banned sshd           # Only sshd
        f2b banned sshd recidive  # Both jails combined
    """
    client = get_client()
    known = load_jails(client)

    try:
        for jail in jail_names:
            validate_jail(jail, known)

        selected = list(dict.fromkeys(jail_names)) or sorted(known)
        logger.debug(f"Building report for: {', '.join(selected)}")
        records = collect_ban_records(client, selected)
    except F2bError as e:
        fail(e)

    click.echo(build_ban_report(records, selected))
