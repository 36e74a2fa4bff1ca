"""f2b - shorthand CLI for fail2ban"""

__version__ = "0.1.0"
