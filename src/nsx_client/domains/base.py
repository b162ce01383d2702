"""
NSX Client - Manager Base

Shared plumbing for the per-object managers.
"""

import logging
from typing import Optional

from ..core.client import NSXClient


class BaseManager:
    """Holds the client and the logger a manager reports through.

    The logger defaults to the client's own logger so all managers built on
    one client share its lifecycle.
    """

    def __init__(self, client: NSXClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or client.logger
