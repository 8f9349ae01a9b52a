"""
Constants shared by the time and slot modules.
"""

AM = "A.M."
PM = "P.M."

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24

# Separator between the start and end display times of a slot
RANGE_SEPARATOR = " - "
