import logging
import re
from datetime import date, datetime, time
from typing import Optional, Tuple

from .. import config
from ..models import CaptureDate, DateSource, ImageMetadata

_FILENAME_PATTERNS = [
    (name, re.compile(pattern, re.IGNORECASE))
    for name, pattern in config.FILENAME_DATE_PATTERNS
]


def parse_exif_timestamp(dt_str: Optional[str]) -> Optional[Tuple[date, Optional[time]]]:
    """
    Parses an EXIF timestamp ("YYYY:MM:DD HH:MM:SS") into (date, time).

    The date part decides: it may use ':' or '-' separators. The time is
    attached only when it parses too, so a blank or out-of-range time
    ("2012:10:06   :  :  ") still yields the date with time None.
    Sub-second and timezone tails are ignored. Returns None for blank,
    zeroed ("0000:00:00 00:00:00") or otherwise invalid dates.
    """
    if not dt_str:
        return None
    parts = str(dt_str).strip().split(None, 1)
    if not parts:
        return None

    try:
        day = datetime.strptime(parts[0].replace(':', '-'), "%Y-%m-%d").date()
    except ValueError:
        return None

    tod = None
    if len(parts) > 1:
        try:
            tod = datetime.strptime(parts[1].strip()[:8], "%H:%M:%S").time()
        except ValueError:
            logging.debug(f"Ignoring unusable time in EXIF timestamp '{dt_str}'")
    return day, tod


def date_from_filename(filename: str) -> Optional[CaptureDate]:
    """
    Infers a capture date from well-known camera/messaging naming schemes.

    Precedence (first valid match wins):
      1) 'YYYY-MM-DD' anywhere in the name
      2) 'YYYYMMDD_HHMMSS'
      3) 'IMG-YYYYMMDD...' (WhatsApp style)
      4) 'IMG_YYYYMMDD_HHMMSS...' (Android camera style)

    A match carrying an impossible calendar value (month 13, Feb 30) is
    rejected and the next pattern is tried.
    """
    for name, pattern in _FILENAME_PATTERNS:
        m = pattern.search(filename)
        if not m:
            continue
        groups = m.groupdict()
        try:
            day = date(int(groups['y']), int(groups['m']), int(groups['d']))
        except ValueError:
            logging.debug(f"Ignoring invalid date in {filename} (pattern '{name}')")
            continue  # invalid combo, keep looking

        tod = None
        if groups.get('H') is not None:
            try:
                tod = time(int(groups['H']), int(groups['M']), int(groups['S']))
            except ValueError:
                logging.debug(f"Ignoring invalid time in {filename} (pattern '{name}')")
                continue

        return CaptureDate(day.year, day.month, day.day, tod, DateSource.FILENAME)

    return None


def extract_date(filename: str, metadata: Optional[ImageMetadata]) -> Optional[CaptureDate]:
    """
    Best-effort capture date for one entry. None means unknown.

    EXIF DateTimeOriginal wins over anything found in the filename.
    """
    if metadata is not None:
        parsed = parse_exif_timestamp(metadata.datetime_original)
        if parsed is not None:
            day, tod = parsed
            return CaptureDate(day.year, day.month, day.day, tod, DateSource.EXIF)
        if metadata.datetime_original:
            logging.debug(f"Unusable DateTimeOriginal '{metadata.datetime_original}' for {filename}")

    return date_from_filename(filename)
