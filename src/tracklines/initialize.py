# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from tracklines import configuration
from tracklines.logger import configure_logging
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.storage import FileDocumentStore, HttpDocumentStore
from tracklines.repository.user_data import USER_DATA_REPO
from tracklines.template.configuration import (
    DEFAULT_REQUEST_TIMEOUT,
    get_configuration_template,
)
from tracklines.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])

    if config["remote_url"] is not None:
        USER_DATA_REPO.use_store(
            HttpDocumentStore(
                config["remote_url"],
                config.get("request_timeout", DEFAULT_REQUEST_TIMEOUT),
            )
        )
    else:
        USER_DATA_REPO.use_store(
            FileDocumentStore(configuration.DATA_USER_DATA_PATH)
        )


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config: configuration.Configuration = get_configuration_template()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))
