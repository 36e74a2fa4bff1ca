#!/usr/bin/env python3

"""List jails known to the daemon"""

import click

from f2b.commands.common import get_client, load_jails


@click.command()
def jails():
    """
    📋 List jails

    Prints one jail name per line, sorted.

    \b
    Examples:
        f2b jails
    """
    names = sorted(load_jails(get_client()))
    if not names:
        click.echo("No jails configured", err=True)
        return
    for name in names:
        click.echo(name)
