"""
Defaults for how many rules a renderer lists next to the strength bars.
0 shows the bars only.
"""

DEFAULT_MAX_RULES = 2
