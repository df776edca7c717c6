import pathlib

import appdirs

from ._version import __version__

USER_DATA_DIR = pathlib.Path(appdirs.user_data_dir('sosawot', version=__version__))
USER_DATA_DIR.mkdir(parents=True, exist_ok=True)

CONFIG = USER_DATA_DIR / 'sosawot-config.ini'
