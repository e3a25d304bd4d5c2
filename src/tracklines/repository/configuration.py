# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from tracklines import configuration
from tracklines.template.configuration import get_configuration_template


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not configuration.APP_CONFIG_PATH.is_file():
            self._config = get_configuration_template()
            return

        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Migration: add any field introduced after the config file was written
        raw_config = cast(dict[str, Any], self._config)
        for key, value in get_configuration_template().items():
            if key not in raw_config:
                raw_config[key] = value

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        """Forget the cached configuration so it is read again on next use."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        remote_url: Optional[str] = None,
        remove_remote_url: bool = False,
        request_timeout: Optional[float] = None,
        log_level: Optional[str] = None,
        show_header: Optional[bool] = None,
        chart_days: Optional[int] = None,
        random_colour_for_trackables: Optional[bool] = None,
        new_entries_at_head: Optional[bool] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if remote_url is not None:
            self.config["remote_url"] = remote_url
        if remove_remote_url:
            self.config["remote_url"] = None
        if request_timeout is not None:
            self.config["request_timeout"] = request_timeout
        if log_level is not None:
            self.config["log_level"] = log_level
        if show_header is not None:
            self.config["show_header"] = show_header
        if chart_days is not None:
            self.config["chart_days"] = chart_days
        if random_colour_for_trackables is not None:
            self.config["random_colour_for_trackables"] = random_colour_for_trackables
        if new_entries_at_head is not None:
            self.config["new_entries_at_head"] = new_entries_at_head


CONFIGURATION_REPO = ConfigurationRepository()
