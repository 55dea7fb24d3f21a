import logging
from typing import Optional

from ..db.manager import DatabaseManager


class BaseService:
    """
    Base class for services.

    Services encapsulate business logic on top of the store. A service is
    handed the database manager it works against instead of reaching for a
    global connection, and opens one session per operation.
    """

    def __init__(self, db: DatabaseManager, logger: Optional[logging.Logger] = None):
        self.db = db
        self._logger = logger or logging.getLogger(self.__class__.__module__)
