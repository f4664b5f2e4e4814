"""Global constants for the board plotter.

Lengths are in mils (1/1000 inch), angles in decidegrees.
"""

# Stroke width
DEFAULT_LINE_WIDTH = 1
"""Stroke width the backend draws with when no explicit width applies."""

# Angles
FULL_CIRCLE = 3600
"""Decidegrees per full turn."""

# Drill marks
SMALL_DRILL = 14
"""Cap for circular drill marks in small-drill mode (0.35 mm, rounded to mils)."""

# Vias
VIA_DIAMETER_ADJUST = 2
"""Added to a via's copper width before it is flashed."""
