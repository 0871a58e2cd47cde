"""
League stats calculator.

Turns chronological head-to-head match results into ranked league tables
for teams and, for "2v2" leagues, for the individuals composing each team.
"""

__version__ = "1.0.0"
