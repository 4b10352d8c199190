"""
Wall clock helpers.

Every stored and exported timestamp is an integer count of milliseconds
since the Unix epoch.

Dependencies: time
System role: Shared time source for core and storage
"""

import time


def now_ms() -> int:
    """Current time as integer milliseconds since the Unix epoch."""
    return int(time.time() * 1000)
