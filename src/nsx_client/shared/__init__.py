"""
NSX Client - Shared Utilities

Constants, XML helpers, payload templates and validation used by the domains.
"""

from . import constants
