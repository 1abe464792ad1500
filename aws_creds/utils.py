import json
import os
import tempfile

from pydantic import ValidationError
import toml

from .constants import STORE_FILE_MODE
from .exceptions import ConfigError, StoreIOError, StoreMalformedError, \
    StoreNotFoundError
from .models import ProfileStore


# settings.toml keys and the types they must have
SETTINGS_SCHEMA = {
    'store': str,
    'region': str,
    'session_duration': int,
    'log_file': str,
}


def load_store(filename):
    """Read the credential store at filename.

    Raises StoreNotFoundError when the file is absent, StoreMalformedError
    when it is not valid JSON or does not have the store's shape, and
    StoreIOError for every other OS failure.
    """

    try:
        with open(filename, 'r', encoding='utf-8') as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise StoreNotFoundError(filename) from e
    except OSError as e:
        raise StoreIOError(
            'unable to read `{}`: {}'.format(filename, e.strerror or e)
        ) from e

    try:
        document = json.loads(raw)
    except ValueError as e:
        raise StoreMalformedError(filename, 'invalid JSON ({})'.format(e)) from e

    try:
        return ProfileStore.model_validate(document)
    except ValidationError as e:
        reason = '; '.join(
            '{}: {}'.format('.'.join(map(str, err['loc'])) or '<root>', err['msg'])
            for err in e.errors()
        )
        raise StoreMalformedError(filename, reason) from e


def save_store(store, filename):
    """Write the whole store to filename, replacing it atomically"""

    contents = json.dumps(store.model_dump(), indent=2)
    directory = os.path.dirname(os.path.abspath(filename))
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            'w',
            encoding='utf-8',
            dir=directory,
            prefix='.creds-',
            suffix='.tmp',
            delete=False
        ) as f:
            tmp_name = f.name
            f.write(contents)
            f.write('\n')
        os.chmod(tmp_name, STORE_FILE_MODE)
        os.replace(tmp_name, filename)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise StoreIOError(
            'unable to write `{}`: {}'.format(filename, e.strerror or e)
        ) from e


def read_settings(filename):
    """read settings.toml, a missing file means no settings"""

    try:
        with open(filename, 'r', encoding='utf-8') as f:
            settings = toml.load(f)
    except FileNotFoundError:
        return dict()
    except toml.TomlDecodeError as e:
        raise ConfigError(
            'unable to parse settings file `{}`: {}'.format(filename, e)
        ) from e
    except OSError as e:
        raise ConfigError(
            'unable to read settings file `{}`: {}'.format(
                filename, e.strerror or e)
        ) from e

    for key, expected in SETTINGS_SCHEMA.items():
        value = settings.get(key)
        # bool is an int subclass, it is never a valid duration
        if value is not None and (
                not isinstance(value, expected) or isinstance(value, bool)):
            raise ConfigError(
                'setting `{}` in `{}` must be of type {}'.format(
                    key, filename, expected.__name__)
            )
    return settings
