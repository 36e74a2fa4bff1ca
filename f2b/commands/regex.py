#!/usr/bin/env python3

"""Test filter regexes against a log"""

import logging
import subprocess
import sys
from pathlib import Path

import click

from f2b.commands.common import fail, get_settings
from f2b.lib.client import with_sudo
from f2b.lib.config import load_settings
from f2b.lib.errors import F2bError

logger = logging.getLogger(__name__)


def resolve_filter(filter_arg: str, filter_dir: str) -> str:
    """
    Map a bare filter name to its file in the filter directory.

    Existing paths and anything that is not a known filter name are passed
    through untouched, fail2ban-regex treats the latter as a literal regex.
    """
    if Path(filter_arg).exists() or "/" in filter_arg:
        return filter_arg
    candidate = Path(filter_dir) / f"{filter_arg}.conf"
    if candidate.exists():
        return str(candidate)
    return filter_arg


def complete_filter(ctx, param, incomplete):
    """Autocomplete filter names from the filter directory."""
    try:
        filter_dir = Path(load_settings().filter_dir)
    except F2bError as e:
        logger.debug(f"Filter completion unavailable: {e}")
        return []
    if not filter_dir.is_dir():
        return []
    return sorted(p.stem for p in filter_dir.glob("*.conf") if p.stem.startswith(incomplete))


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.argument("log")
@click.argument("filter_arg", metavar="FILTER", shell_complete=complete_filter)
@click.option("-a", "--all-matched", is_flag=True, help="Print every matched line")
@click.argument("extra", nargs=-1, type=click.UNPROCESSED)
def regex(log, filter_arg, all_matched, extra):
    """
    🧪 Test a filter against a log LOG FILTER

    LOG is a log file or a single log line. FILTER is a filter name from the
    filter directory (e.g. sshd), a path to a filter file, or a literal regex.
    Extra arguments are passed to fail2ban-regex.

    \b
    Examples:
        f2b regex /var/log/auth.log sshd
        f2b regex /var/log/nginx/error.log nginx-http-auth -a
        f2b regex "Failed password for root from 192.0.2.7" "Failed password .* from <HOST>"
    """
    settings = get_settings()
    cmd = [settings.regex_bin, log, resolve_filter(filter_arg, settings.filter_dir)]
    if all_matched:
        cmd.append("--print-all-matched")
    cmd.extend(extra)
    cmd = with_sudo(cmd, settings.sudo)

    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError:
        fail(f"{settings.regex_bin} not found in PATH. Is fail2ban installed?")
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)
