#!/usr/bin/env python3

"""
Ban report builder.

Turns the output of `fail2ban-client get <jail> banip --with-time` into
aggregate statistics and a bordered text table.

Each line of that output looks like:

    192.0.2.7 	2024-05-01 10:00:00 + 600 = 2024-05-01 10:10:00

Field 1 is the address, fields 2-3 the ban start and field 5 the ban
duration in seconds (-1 for a permanent ban). The remaining fields are ignored.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from f2b.lib.errors import JailNotFoundError, MalformedRecordError
from f2b.lib.models import BanRecord, ReportStatistics

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SECONDS_IN_DAY = 86400
SECONDS_IN_HOUR = 3600
SECONDS_IN_MINUTE = 60

MIN_FIELDS = 5

# (header, minimum width)
COLUMNS = [
    ("#", 3),
    ("Jail", 10),
    ("IP", 15),
    ("Banned at", 19),
    ("Remaining", 10),
]


def validate_jail(jail: str, jails: Iterable[str]) -> None:
    """Raise JailNotFoundError unless `jail` is one of `jails`."""
    known = frozenset(jails)
    if jail not in known:
        raise JailNotFoundError(jail, known)


def parse_ban_line(jail: str, line: str) -> BanRecord:
    """
    Parse a single line of `banip --with-time` output.

    Raises:
        MalformedRecordError: the line does not follow the field grammar
    """
    fields = line.split()
    if len(fields) < MIN_FIELDS:
        raise MalformedRecordError(line, f"expected at least {MIN_FIELDS} fields, got {len(fields)}")

    ip, date, time, duration = fields[0], fields[1], fields[2], fields[4]

    try:
        banned_at = datetime.strptime(f"{date} {time}", DATE_FORMAT)
    except ValueError as e:
        raise MalformedRecordError(line, f"bad timestamp: {e}") from e

    try:
        seconds = int(duration)
    except ValueError as e:
        raise MalformedRecordError(line, f"bad duration {duration!r}") from e

    if seconds < 0:
        return BanRecord(ip=ip, banned_at=banned_at, unban_at=None, jail=jail)

    try:
        unban_at = banned_at + timedelta(seconds=seconds)
    except OverflowError as e:
        raise MalformedRecordError(line, f"duration {seconds} out of range") from e

    return BanRecord(ip=ip, banned_at=banned_at, unban_at=unban_at, jail=jail)


def parse_ban_records(jail: str, text: str) -> List[BanRecord]:
    """Parse every well-formed line of a jail's listing, skipping the rest."""
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            records.append(parse_ban_line(jail, line))
        except MalformedRecordError as e:
            logger.debug(f"[{jail}] skipping line: {e}")
    return records


def collect_ban_records(client, jails: Sequence[str]) -> List[BanRecord]:
    """
    Query the daemon for every jail and parse the results.

    One call per jail. A failing call propagates (UpstreamUnavailableError)
    so no partial report is ever produced.
    """
    records: List[BanRecord] = []
    for jail in jails:
        output = client.get_banned_with_time(jail)
        parsed = parse_ban_records(jail, output)
        logger.debug(f"[{jail}] {len(parsed)} active ban(s)")
        records.extend(parsed)
    return records


def order_records(records: Iterable[BanRecord]) -> List[BanRecord]:
    """Sort by unban time (soonest first). Ties keep input order, permanent bans go last."""
    return sorted(records, key=lambda r: (r.permanent, r.unban_at or datetime.min))


def aggregate(records: Sequence[BanRecord], jails: Optional[Iterable[str]] = None) -> ReportStatistics:
    """Compute unique address count and oldest/newest ban start."""
    if jails is None:
        jails = dict.fromkeys(r.jail for r in records)
    if not records:
        return ReportStatistics(jails=list(jails))

    started = [r.banned_at for r in records]
    return ReportStatistics(
        unique_ips=len({r.ip for r in records}),
        oldest=min(started),
        newest=max(started),
        jails=list(jails),
    )


def format_duration(seconds: float) -> str:
    """
    Format a number of seconds as HH:MM:SS.

    Negative values (ban already lifted while the report was built) clamp to
    zero. Durations of a day or more are prefixed with the day count, e.g.
    "2d 03:00:00".
    """
    remaining = max(0, int(seconds))
    days, remaining = divmod(remaining, SECONDS_IN_DAY)
    hours, remaining = divmod(remaining, SECONDS_IN_HOUR)
    minutes, secs = divmod(remaining, SECONDS_IN_MINUTE)
    clock = f"{hours:02d}:{minutes:02d}:{secs:02d}"
    if days:
        return f"{days}d {clock}"
    return clock


def format_remaining(record: BanRecord, now: datetime) -> str:
    if record.permanent:
        return "permanent"
    return format_duration((record.unban_at - now).total_seconds())


def _format_timestamp(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value else "-"


def render_statistics(stats: ReportStatistics) -> List[str]:
    jails = ", ".join(stats.jails) or "(none)"
    if stats.unique_ips == 0:
        return ["No banned IPs", f"Jails:             {jails}"]
    return [
        f"Unique banned IPs: {stats.unique_ips}",
        f"Oldest ban:        {_format_timestamp(stats.oldest)}",
        f"Newest ban:        {_format_timestamp(stats.newest)}",
        f"Jails:             {jails}",
    ]


def column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Width of each column: the largest of its minimum, its header and its longest value."""
    return [
        max(minimum, len(header), *(len(row[index]) for row in rows))
        for index, (header, minimum) in enumerate(COLUMNS)
    ]


def render_table(records: Sequence[BanRecord], stats: ReportStatistics, now: datetime) -> str:
    """Render the statistics block followed by one table row per record, in the given order."""
    lines = render_statistics(stats)
    if not records:
        return "\n".join(lines)

    rows = [
        [str(seq), r.jail, r.ip, r.banned_at.strftime(DATE_FORMAT), format_remaining(r, now)]
        for seq, r in enumerate(records, start=1)
    ]
    widths = column_widths(rows)
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def _row(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)) + " |"

    lines.append("")
    lines.append(border)
    lines.append(_row([header for header, _ in COLUMNS]))
    lines.append(border)
    lines.extend(_row(row) for row in rows)
    lines.append(border)
    return "\n".join(lines)


def build_ban_report(
    records: Sequence[BanRecord],
    jails: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
) -> str:
    """Order, aggregate and render `records` into a stdout-ready text block."""
    ordered = order_records(records)
    stats = aggregate(ordered, jails)
    return render_table(ordered, stats, now or datetime.now())
