import configparser
import logging
import pathlib
from typing import Optional, Union

from . import paths

logger = logging.getLogger("sosawot")

_config = None


def _get_default_config():
    return {
        "profile": "DEFAULT",
        "log_level": str(logging.INFO),
        "http_host": "127.0.0.1",
        "http_port": "8080",
        "identifier_length": "6",
        "input_format": "turtle",
        "base_url": "",
    }


def _get_test_config():
    return {
        "log_level": str(logging.DEBUG),
        "http_port": "8081",
    }


class SosaWotConfiguration:
    """Profile based view on the INI configuration file.

    Every section of the file is a profile. Values missing in a profile fall back to the ``DEFAULT`` section.
    The name of the active profile is stored in the ``DEFAULT`` section.
    """

    def __init__(self, configparser: configparser.ConfigParser, filename: Optional[pathlib.Path] = None):
        self._configparser = configparser
        self.filename = filename

    def __repr__(self):
        return f"<{self.__class__.__name__} ({self.profile})>"

    def __str__(self) -> str:
        out = f"Configuration profile: {self.profile}\n"
        for k in self.keys():
            out += f" > {k}: {self[k]}\n"
        return out

    @property
    def profile(self) -> str:
        return self._configparser["DEFAULT"].get("profile", "DEFAULT")

    @property
    def profiles(self):
        return ["DEFAULT", *self._configparser.sections()]

    def keys(self):
        return self._configparser[self.profile].keys()

    def select_profile(self, profile: str, persist: bool = True):
        """Selects `profile`. With `persist=False` the selection is not written to the config file."""
        if profile != "DEFAULT" and profile not in self._configparser:
            raise ValueError(f"Profile {profile} not found in config file")
        if persist:
            self._set_config("DEFAULT", "profile", profile)
        else:
            self._configparser["DEFAULT"]["profile"] = profile
        return self

    def __getitem__(self, item):
        return self._configparser[self.profile][item]

    def __contains__(self, item):
        return item in self._configparser[self.profile]

    def _set_config(self, section: Union[str], key, value):
        """Set a configuration value."""
        self._configparser[str(section)][key] = str(value)
        if self.filename is not None:
            with open(self.filename, 'w') as f:
                self._configparser.write(f)
        return self

    @property
    def logging_level(self):
        """Get the logging configuration."""
        log_level = self["log_level"]
        try:
            return int(log_level)
        except ValueError:
            return str(log_level).upper()

    @logging_level.setter
    def logging_level(self, value):
        """Set the logging configuration."""
        self._set_config(self.profile, 'log_level', value)

    @property
    def http_host(self) -> str:
        return self["http_host"]

    @property
    def http_port(self) -> int:
        try:
            return int(self["http_port"])
        except ValueError:
            raise ValueError(f"Invalid http_port in profile {self.profile}: {self['http_port']!r}")

    @property
    def identifier_length(self) -> int:
        length = int(self["identifier_length"])
        if not 1 <= length <= 40:
            raise ValueError(f"identifier_length must be between 1 and 40, got {length}")
        return length

    @property
    def input_format(self) -> str:
        return self["input_format"]

    @property
    def base_url(self) -> Optional[str]:
        return self["base_url"] or None


def get_config(overwrite: bool = False) -> SosaWotConfiguration:
    """Initialize the configuration."""
    global _config
    if _config and not overwrite:
        return _config

    logger.debug(f"Initializing config file {paths.CONFIG}...")
    if paths.CONFIG.exists() and not overwrite:
        logger.debug(f"Config file {paths.CONFIG} already exists")
        _config = SosaWotConfiguration(_read_config(paths.CONFIG), paths.CONFIG)
        return _config

    config = configparser.ConfigParser()
    config["DEFAULT"] = _get_default_config()
    config["test"] = _get_test_config()
    with open(paths.CONFIG, 'w') as f:
        config.write(f)
    _config = SosaWotConfiguration(config, paths.CONFIG)
    return _config


def _read_config(filename: pathlib.Path) -> configparser.ConfigParser:
    """Read the configuration."""
    logger.debug(f"Reading config file {filename}...")
    config = configparser.ConfigParser()
    if not filename.exists():
        raise FileNotFoundError(f"Config file {filename} does not exist")
    config.read(filename)
    for key, value in _get_default_config().items():
        config["DEFAULT"].setdefault(key, value)
    return config
