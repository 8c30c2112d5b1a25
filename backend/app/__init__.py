"""
Arena Backend Application Package.

Competitive progression and venue presence engine: 1-on-1 matches, skill
challenges, leaderboards and geofenced check-ins.
"""

__version__ = "0.1.0"
