#!/usr/bin/env python3

"""Common utilities for CLI commands"""

import logging
import sys
from typing import FrozenSet, NoReturn, Optional

import click

from f2b.lib.client import Fail2banClient
from f2b.lib.config import Settings, load_settings
from f2b.lib.errors import F2bError, ToolNotFoundError

logger = logging.getLogger(__name__)


def fail(error, code: int = 1) -> NoReturn:
    """Print an error to stderr and exit."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ToolNotFoundError) and error.tool != "sudo":
        click.echo("Install fail2ban (e.g. 'apt install fail2ban') or set F2B_CLIENT_BIN", err=True)
    sys.exit(code)


def get_settings() -> Settings:
    try:
        return load_settings()
    except F2bError as e:
        fail(e)


def get_client(settings: Optional[Settings] = None) -> Fail2banClient:
    """
    Build a client from the current settings and check the binary is present.

    Exits with an install hint if fail2ban-client cannot be found.
    """
    settings = settings or get_settings()
    client = Fail2banClient(
        binary=settings.client_bin,
        socket=settings.socket,
        sudo=settings.sudo,
        timeout=settings.timeout,
    )
    try:
        client.require_installed()
    except ToolNotFoundError as e:
        fail(e)
    return client


def load_jails(client: Fail2banClient) -> FrozenSet[str]:
    """Take the jail snapshot for this invocation, exiting on failure."""
    try:
        return client.list_jails()
    except F2bError as e:
        fail(e)


def complete_jail(ctx, param, incomplete):
    """
    Autocomplete jail names from the running daemon.

    Args:
        ctx: Click context
        param: Click parameter
        incomplete: Partially typed string to complete

    Returns:
        Sorted jail names starting with the incomplete string
    """
    try:
        settings = load_settings()
        client = Fail2banClient(binary=settings.client_bin, socket=settings.socket, sudo="never", timeout=2)
        jails = client.list_jails()
    except F2bError as e:
        logger.debug(f"Jail completion unavailable: {e}")
        return []
    return sorted(j for j in jails if j.startswith(incomplete))
