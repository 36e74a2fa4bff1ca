#!/usr/bin/env python3

"""fail2ban service control (systemctl passthrough)"""

import logging
import subprocess
import sys

import click

from f2b.commands.common import fail, get_settings
from f2b.lib.client import with_sudo

logger = logging.getLogger(__name__)


def run_systemctl(action: str, elevate: bool = True) -> None:
    settings = get_settings()
    cmd = [settings.systemctl_bin, action, settings.service_name]
    if elevate:
        cmd = with_sudo(cmd, settings.sudo)

    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError:
        fail(f"{settings.systemctl_bin} not found in PATH")
    except subprocess.CalledProcessError as e:
        logger.error(f"systemctl {action} {settings.service_name} failed")
        sys.exit(e.returncode)


@click.group()
def service():
    """
    ⚙️ Control the fail2ban service

    \b
    Examples:
        f2b service start
        f2b service restart
        f2b service status
    """
    pass


@service.command()
def start():
    """Start the fail2ban service"""
    run_systemctl("start")
    click.echo("fail2ban started")


@service.command()
def stop():
    """Stop the fail2ban service"""
    run_systemctl("stop")
    click.echo("fail2ban stopped")


@service.command()
def restart():
    """Restart the fail2ban service"""
    run_systemctl("restart")
    click.echo("fail2ban restarted")


@service.command(name="status")
def service_status():
    """Show systemd status of the fail2ban service"""
    run_systemctl("status", elevate=False)
