"""
Pytest fixtures for functional tests.

These run the CLI against a REAL executable standing in for fail2ban-client,
so argument building, subprocess handling and output parsing are all
exercised end to end. NO MOCKING.
"""

import stat

import pytest

FAKE_CLIENT = r"""#!/bin/sh
echo "$*" >> "{calls}"
case "$*" in
  "status")
    printf 'Status\n|- Number of jail:\t3\n`- Jail list:\tnginx-http-auth, recidive, sshd\n'
    ;;
  "status sshd")
    printf 'Status for the jail: sshd\n`- Actions\n   |- Currently banned:\t2\n   `- Banned IP list:\t192.0.2.7 198.51.100.3\n'
    ;;
  "get sshd banip --with-time")
    printf '192.0.2.7 \t2024-05-01 10:00:00 + 600 = 2024-05-01 10:10:00\n'
    printf '\n'
    printf 'not a ban line\n'
    printf '198.51.100.3 \t2024-05-01 09:30:00 + 3600 = 2024-05-01 10:30:00\n'
    ;;
  "get recidive banip --with-time")
    printf '192.0.2.7 \t2024-04-30 08:00:00 + -1 = 9999-12-31 23:59:59\n'
    ;;
  "get nginx-http-auth banip --with-time")
    ;;
  "set sshd banip "*|"set sshd unbanip "*|"unban "*)
    echo 1
    ;;
  "ping")
    echo "Server replied: pong"
    ;;
  *)
    echo "ERROR  Failed to access socket path: /var/run/fail2ban/fail2ban.sock. Is fail2ban running?" >&2
    exit 255
    ;;
esac
"""


@pytest.fixture
def fake_client(tmp_path, monkeypatch):
    """Install a fake fail2ban-client and point f2b at it.

    Returns:
        {
            "binary": Path to the fake client,
            "calls": Path to the file recording each invocation's arguments
        }
    """
    calls = tmp_path / "calls.txt"
    calls.touch()

    binary = tmp_path / "bin" / "fail2ban-client"
    binary.parent.mkdir()
    binary.write_text(FAKE_CLIENT.replace("{calls}", str(calls)))
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    monkeypatch.setenv("F2B_CONFIG", str(tmp_path / "no-config.yml"))
    monkeypatch.setenv("F2B_CLIENT_BIN", str(binary))
    monkeypatch.setenv("F2B_SUDO", "never")

    return {"binary": binary, "calls": calls}
