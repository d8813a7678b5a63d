"""
Feedscore Worker.

arq worker running deferred and bulk article feed counter updates.
"""

__version__ = "0.1.0"
