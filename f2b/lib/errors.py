"""Exceptions raised by the f2b library layer."""

from typing import Iterable, List, Optional


class F2bError(Exception):
    """Base class for all f2b errors"""


class JailNotFoundError(F2bError):
    """Requested jail is not known to the daemon"""

    def __init__(self, jail: str, known: Iterable[str]):
        self.jail = jail
        self.known = sorted(known)
        super().__init__(f"Jail '{jail}' not found. Available: {', '.join(self.known) or '(none)'}")


class MalformedRecordError(F2bError):
    """A line of daemon output could not be parsed into a ban record"""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed ban record {line!r}: {reason}")


class UpstreamUnavailableError(F2bError):
    """The daemon client failed, timed out or could not be executed"""

    def __init__(self, command: List[str], returncode: Optional[int] = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or (f"exit code {returncode}" if returncode is not None else "no response")
        super().__init__(f"{' '.join(command)} failed: {detail}")


class ToolNotFoundError(F2bError):
    """A required binary is not installed"""

    def __init__(self, tool: str, hint: str = "Is fail2ban installed?"):
        self.tool = tool
        super().__init__(f"{tool} not found in PATH. {hint}")


class ConfigError(F2bError):
    """Settings could not be loaded or are invalid"""
