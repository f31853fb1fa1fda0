"""Defaults shared across datehelper."""

MINUTE = 60

# Seconds between snap() boundaries
SNAP_INTERVAL = 5 * MINUTE

# Components rendered by time_ago()
TIME_AGO_PARTS = 3
