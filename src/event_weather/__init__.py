"""Event weather planner.

Scores planned events against current weather and the 5 day forecast, and
suggests better dates nearby.
"""

__version__ = "0.1.0"
