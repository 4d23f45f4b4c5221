"""
Content API orders samples.

Runs a test order through its whole lifecycle on the Content API sandbox.
"""

__version__ = "0.1.0"
