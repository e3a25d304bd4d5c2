# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from tracklines import configuration
from tracklines.model.user_data import UserData
from tracklines.repository.serialization import from_json, to_json
from tracklines.repository.storage import DocumentStore, FileDocumentStore
from tracklines.service.user_data import check_integrity

logger = logging.getLogger(__name__)


class UserDataRepository:
    """
    The user's trackables, chartables and charts, held as one document.

    The document is loaded whole on first use and saved whole on every
    commit. If a save fails the new data stays in memory and dirty, so the
    next commit or flush tries again.
    """

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self._store = store
        self._user_data: Optional[UserData] = None
        self.is_dirty = False

    @property
    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = FileDocumentStore(configuration.DATA_USER_DATA_PATH)
        return self._store

    def use_store(self, store: DocumentStore) -> None:
        self._store = store
        self._user_data = None
        self.is_dirty = False

    @property
    def user_data(self) -> UserData:
        if self._user_data is None:
            self.__load_data()
        if self._user_data is None:
            raise ValueError()
        return self._user_data

    def __load_data(self) -> None:
        user_data = from_json(self.store.load())
        for violation in check_integrity(user_data):
            logger.warning("Referential integrity violation: %s", violation)
        logger.info("Loaded user data from %r", self.store)
        self._user_data = user_data

    def __save_data(self, user_data: UserData) -> None:
        self.store.save(to_json(user_data))
        logger.info("Saved user data to %r", self.store)

    def flush(self) -> bool:
        if self._user_data is not None and self.is_dirty:
            self.__save_data(self._user_data)
            self.is_dirty = False
            return True
        return False

    def get_user_data(self) -> UserData:
        return deepcopy(self.user_data)

    def commit(self, user_data: UserData) -> None:
        """Replace the user data with an edited version and save it."""
        self._user_data = deepcopy(user_data)
        self.is_dirty = True
        self.flush()


USER_DATA_REPO = UserDataRepository()
