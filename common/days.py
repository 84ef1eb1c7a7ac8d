"""
Weekday name to day key mapping
"""

# German weekday names as they appear on the menu pages
DAY_KEYS = {
    'montag': '1',
    'dienstag': '2',
    'mittwoch': '3',
    'donnerstag': '4',
    'freitag': '5',
    'samstag': '6',
    'sonntag': '7',
}

# Display names, index 0 is day key "1"
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


def day_key(name: str) -> str:
    """
    Convert a German weekday name to its day key

    Args:
        name: Weekday name like "Montag" (case-insensitive)

    Returns:
        "1" (Monday) through "7" (Sunday), or "" for anything else
    """
    if not name:
        return ''
    return DAY_KEYS.get(name.strip().lower(), '')
