"""
ARES Dialogue Engine
Topic lifecycle tracking + narrative classification + identity-calibrated correction directives.
"""

__version__ = "0.1.0"
