#!/usr/bin/env python3

"""Check the daemon is reachable"""

import sys

import click

from f2b.commands.common import get_client


@click.command()
def ping():
    """
    🏓 Check the fail2ban daemon is reachable

    Exits 0 when the daemon answers, 1 otherwise.
    """
    if get_client().ping():
        click.echo("fail2ban is running")
    else:
        click.echo("fail2ban is not responding", err=True)
        sys.exit(1)
