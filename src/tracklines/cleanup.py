# SPDX-License-Identifier: MIT

import atexit
import logging

from tracklines.error import StorageError
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.user_data import USER_DATA_REPO

logger = logging.getLogger(__name__)


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()

    # Commands save as they go; this only catches a save that failed earlier
    try:
        USER_DATA_REPO.flush()
    except StorageError as e:
        logger.error("Unsaved changes were lost: %s", e)


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
