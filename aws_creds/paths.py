import os

from .constants import CONFIG_DIR_PARTS, SETTINGS_FILE_NAME, LOG_FILE_NAME, \
    STORE_FILE_NAME
from .exceptions import ConfigError, StoreIOError, StoreNotFoundError


def get_config_dir():
    """return ~/.config/aws-creds for the current user"""

    home = os.path.expanduser('~')
    if not home or home == '~':
        raise ConfigError('unable to determine the home directory')
    return os.path.join(home, *CONFIG_DIR_PARTS)


def get_default_store_path():

    return os.path.join(get_config_dir(), STORE_FILE_NAME)


def get_settings_path():

    return os.path.join(get_config_dir(), SETTINGS_FILE_NAME)


def get_default_log_path():

    return os.path.join(get_config_dir(), LOG_FILE_NAME)


def resolve_path(explicit_path=None):
    """Return the store path to use.

    An explicit path is returned verbatim and is not checked for existence;
    use check_exists() for that. Otherwise the default path under the user's
    config directory is returned.
    """

    if explicit_path:
        return explicit_path
    return get_default_store_path()


def check_exists(path):
    """Return path if it exists, raise StoreNotFoundError or StoreIOError"""

    try:
        os.stat(path)
    except FileNotFoundError as e:
        raise StoreNotFoundError(path) from e
    except OSError as e:
        raise StoreIOError(
            'unable to access `{}`: {}'.format(path, e.strerror or e)
        ) from e
    return path


def ensure_parent_dir(path):
    """create the directory that will hold path"""

    parent = os.path.dirname(os.path.abspath(path))
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise StoreIOError(
            'unable to create directory `{}`: {}'.format(
                parent, e.strerror or e)
        ) from e
    return parent
