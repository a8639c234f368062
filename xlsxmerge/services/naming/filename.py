"""Output file name generation from a placeholder template.

Supported placeholders::

    %yyyy  year (2024)           %mi   minute (30)
    %yy    two-digit year (24)   %s    second (45)
    %mo    month (05)            %ms   milliseconds (007)
    %d     day (15)              %day  weekday name (Wednesday)
    %h     hour, 24h (14)        %q    quarter (1-4)
    %wk    ISO week (01-53)      %count number of merged files
    %user  login name            %machine host name
"""

from __future__ import annotations

import getpass
import platform
import re
from datetime import datetime
from typing import Dict, Optional

EXTENSION = ".xlsx"

_TOKENS = (
    "%yyyy",
    "%yy",
    "%mo",
    "%d",
    "%h",
    "%mi",
    "%s",
    "%ms",
    "%day",
    "%q",
    "%wk",
    "%count",
    "%user",
    "%machine",
)
# Longest first so that %day is not read as %d followed by "ay".
_TOKEN_RE = re.compile("|".join(re.escape(t) for t in sorted(_TOKENS, key=len, reverse=True)))
_UNDERSCORES_RE = re.compile(r"_{2,}")


def current_user() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "user"


def current_machine() -> str:
    return platform.node() or "machine"


def token_values(
    now: datetime,
    file_count: int = 0,
    user: Optional[str] = None,
    machine: Optional[str] = None,
) -> Dict[str, str]:
    return {
        "%yyyy": f"{now.year:04d}",
        "%yy": f"{now.year % 100:02d}",
        "%mo": f"{now.month:02d}",
        "%d": f"{now.day:02d}",
        "%h": f"{now.hour:02d}",
        "%mi": f"{now.minute:02d}",
        "%s": f"{now.second:02d}",
        "%ms": f"{now.microsecond // 1000:03d}",
        "%day": now.strftime("%A"),
        "%q": str((now.month + 2) // 3),
        "%wk": f"{now.isocalendar()[1]:02d}",
        "%count": str(file_count),
        "%user": user if user is not None else current_user(),
        "%machine": machine if machine is not None else current_machine(),
    }


def generate_filename(
    template: str,
    prefix: str = "",
    suffix: str = "",
    replace_spaces: bool = True,
    file_count: int = 0,
    *,
    now: Optional[datetime] = None,
    user: Optional[str] = None,
    machine: Optional[str] = None,
) -> str:
    """Render ``template`` into an ``.xlsx`` file name.

    Placeholders are substituted, then ``prefix``/``suffix`` wrap the result.
    Spaces become underscores when ``replace_spaces`` is set, runs of
    underscores collapse to one and the extension is appended when missing.
    """

    values = token_values(now or datetime.now(), file_count, user, machine)
    filename = _TOKEN_RE.sub(lambda match: values[match.group(0)], template)
    filename = f"{prefix}{filename}{suffix}"
    if replace_spaces:
        filename = filename.replace(" ", "_")
    filename = _UNDERSCORES_RE.sub("_", filename)
    if not filename.lower().endswith(EXTENSION):
        filename += EXTENSION
    return filename
