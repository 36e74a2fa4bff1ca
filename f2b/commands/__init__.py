"""
f2b CLI Commands

Each module holds one click command (or group) registered on the `f2b` group
in f2b.cli.
"""
