#!/usr/bin/env python3

"""Show and follow the fail2ban log"""

import logging
import sys
from pathlib import Path

import click

from f2b.commands.common import complete_jail, fail, get_settings
from f2b.lib.tail import LogFollower, read_last_lines

logger = logging.getLogger(__name__)


def jail_filter(jail):
    """Predicate keeping lines tagged with `[jail]`, or every line when jail is None."""
    if not jail:
        return lambda line: True
    tag = f"[{jail}]"
    return lambda line: tag in line


@click.command()
@click.option("-n", "--lines", default=20, type=int, help="Number of initial lines to show (default: 20)")
@click.option("-f", "--follow", is_flag=True, help="Keep printing new lines as they are written")
@click.option("-j", "--jail", shell_complete=complete_jail, help="Only lines for this jail")
@click.option("--file", "log_file", type=click.Path(dir_okay=False), help="Log file (default: from settings)")
def logs(lines, follow, jail, log_file):
    """
    📜 Show the fail2ban log

    Prints the last lines of the daemon log. With --follow the file is polled
    and new lines are printed until Ctrl+C. Log rotation is handled.

    \b
    Examples:
        f2b logs                 # Last 20 lines
        f2b logs -n 100 -f       # Follow
        f2b logs -f -j sshd      # Follow sshd events only
    """
    settings = get_settings()
    path = Path(log_file or settings.log_file)
    keep = jail_filter(jail)

    try:
        if lines > 0:
            # Filter before trimming so -n counts matching lines
            history = [line for line in read_last_lines(path, None if jail else lines) if keep(line)]
            for line in history[-lines:]:
                click.echo(line)

        if not follow:
            return

        follower = LogFollower(path, interval=settings.poll_interval)
        follower.seek_end()
        logger.debug(f"Following {path} every {settings.poll_interval}s")
        for line in follower.follow():
            if keep(line):
                click.echo(line)
    except FileNotFoundError:
        fail(f"Log file not found: {path}")
    except PermissionError:
        fail(f"Permission denied reading {path} (try sudo)")
    except KeyboardInterrupt:
        sys.exit(0)
