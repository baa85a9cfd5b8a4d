"""Certificate number generation.

Format: ``yyyyMMddHHmmss`` + 3-digit milliseconds + 2-digit random suffix,
19 digits in total. Two numbers issued in the same millisecond collide
with probability 1/100, so callers must check for collisions.
"""

import random
import re
from datetime import datetime

CERTIFICATE_ID_LENGTH = 19
CERTIFICATE_ID_PATTERN = re.compile(r"^\d{19}$")


def new_certificate_id(now: datetime, rng: random.Random | None = None) -> str:
    """Encode ``now`` plus a random two-digit suffix as a certificate number."""
    suffix = (rng or random).randrange(100)
    return (
        f"{now.year:04d}{now.month:02d}{now.day:02d}"
        f"{now.hour:02d}{now.minute:02d}{now.second:02d}"
        f"{now.microsecond // 1000:03d}{suffix:02d}"
    )
