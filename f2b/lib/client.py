#!/usr/bin/env python3

"""
Wrapper around the fail2ban-client binary.

Every call shells out once and either returns the client's stdout or raises
UpstreamUnavailableError. Nothing is retried.
"""

import logging
import os
import re
import shutil
import subprocess
from typing import FrozenSet, List, Optional

from f2b.lib.errors import F2bError, ToolNotFoundError, UpstreamUnavailableError
from f2b.lib.logging_config import TRACE

logger = logging.getLogger(__name__)

JAIL_LIST_RE = re.compile(r"Jail list:[ \t]*(.*)$", re.MULTILINE)
JAIL_COUNT_RE = re.compile(r"Number of jail:\s*(\d+)")
SUDO_HINT = "Install sudo or set F2B_SUDO=never"


def needs_sudo(mode: str) -> bool:
    """Decide whether to elevate: 'always', 'never' or 'auto' (when not running as root)."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    return os.geteuid() != 0


def with_sudo(cmd: List[str], mode: str) -> List[str]:
    return ["sudo", *cmd] if needs_sudo(mode) else list(cmd)


class Fail2banClient:
    """
    Thin synchronous interface to fail2ban-client.

    Usage:
        client = Fail2banClient()
        jails = client.list_jails()
        listing = client.get_banned_with_time("sshd")
        client.ban("sshd", "192.0.2.7")
    """

    def __init__(self, binary: str = "fail2ban-client", socket: Optional[str] = None, sudo: str = "auto", timeout: int = 10):
        self.binary = binary
        self.socket = socket
        self.sudo = sudo
        self.timeout = timeout

    def _command(self, *args: str) -> List[str]:
        cmd = [self.binary]
        if self.socket:
            cmd += ["-s", self.socket]
        cmd += list(args)
        return with_sudo(cmd, self.sudo)

    def _run(self, *args: str) -> str:
        cmd = self._command(*args)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as e:
            if cmd[0] == "sudo":
                raise ToolNotFoundError("sudo", SUDO_HINT) from e
            raise ToolNotFoundError(cmd[0]) from e
        except subprocess.TimeoutExpired as e:
            raise UpstreamUnavailableError(cmd, stderr=f"timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise UpstreamUnavailableError(cmd, result.returncode, result.stderr or result.stdout)
        logger.log(TRACE, f"Output of {' '.join(args)}: {result.stdout!r}")
        return result.stdout

    def is_installed(self) -> bool:
        """Check that the client binary can be found."""
        return shutil.which(self.binary) is not None

    def require_installed(self) -> None:
        if not self.is_installed():
            raise ToolNotFoundError(self.binary)

    def list_jails(self) -> FrozenSet[str]:
        """Snapshot of the jails known to the daemon."""
        output = self._run("status")
        match = JAIL_LIST_RE.search(output)
        if match:
            return frozenset(j.strip() for j in match.group(1).split(",") if j.strip())

        count = JAIL_COUNT_RE.search(output)
        if count and int(count.group(1)) == 0:
            return frozenset()

        raise UpstreamUnavailableError(self._command("status"), stderr=f"unexpected status output: {output.strip()!r}")

    def get_banned_with_time(self, jail: str) -> str:
        """Raw `banip --with-time` listing for one jail."""
        return self._run("get", jail, "banip", "--with-time")

    def status(self, jail: Optional[str] = None) -> str:
        if jail:
            return self._run("status", jail)
        return self._run("status")

    def ban(self, jail: str, ip: str) -> str:
        output = self._run("set", jail, "banip", ip)
        logger.info(f"Banned {ip} in {jail}")
        return output

    def unban(self, ip: str, jail: Optional[str] = None) -> str:
        """Unban from one jail, or from every jail when `jail` is None."""
        if jail:
            output = self._run("set", jail, "unbanip", ip)
        else:
            output = self._run("unban", ip)
        logger.info(f"Unbanned {ip}" + (f" from {jail}" if jail else " from all jails"))
        return output

    def unban_all(self) -> str:
        output = self._run("unban", "--all")
        logger.info("Unbanned all IPs")
        return output

    def reload(self, jail: Optional[str] = None) -> str:
        if jail:
            return self._run("reload", jail)
        return self._run("reload")

    def ping(self) -> bool:
        """True if the daemon answers."""
        try:
            self._run("ping")
            return True
        except F2bError as e:
            logger.debug(f"Ping failed: {e}")
            return False
