# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "tracklines"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_USER_DATA_PATH: Path = DATA_PATH / "user-data.json"


class Configuration(TypedDict):
    data_path: Optional[str]
    remote_url: Optional[str]  # server exposing /api/data, instead of the local file
    request_timeout: NotRequired[float]
    log_level: str
    show_header: bool
    chart_days: int
    random_colour_for_trackables: bool
    new_entries_at_head: bool


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the user data
    repository loads anything.
    """
    global DATA_PATH, DATA_USER_DATA_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    # Resolve the data path
    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_USER_DATA_PATH = DATA_PATH / "user-data.json"
