"""Operations on an in-memory ProfileStore.

Every function takes the store it works on and mutates it in place; loading
and saving are left to the caller so one command is one load, one mutation
and one save.
"""
from .constants import RESERVED_PROFILE_NAME
from .exceptions import InvalidProfileNameError, ProfileExistsError, \
    ProfileNotFoundError
from .models import Profile, TemporaryCredentials


def validate_name(name):
    """raise InvalidProfileNameError for empty or reserved names"""

    if not name or not name.strip():
        raise InvalidProfileNameError('profile name cannot be empty')
    if name == RESERVED_PROFILE_NAME:
        raise InvalidProfileNameError(
            '`{}` is not a valid profile name. Please choose a different'
            ' profile name or run again without any arguments to use the'
            ' profile set as default'.format(RESERVED_PROFILE_NAME)
        )
    return name


def create_profile(store, name, permanent_credentials, make_default=False):
    """Add or overwrite a profile with empty temporary credentials.

    Asking before overwriting an existing profile is the caller's job.
    """

    validate_name(name)
    store.profiles[name] = Profile(
        permanent_credentials=permanent_credentials,
        temporary_credentials=TemporaryCredentials.empty()
    )
    if make_default:
        store.default = name
    return store.profiles[name]


def lookup_profile(store, name):

    try:
        return store.profiles[name]
    except KeyError:
        raise ProfileNotFoundError(name) from None


def remove_profile(store, name):
    """Remove a profile.

    Removing the default profile leaves the default pointer dangling; see
    effective_default().
    """

    lookup_profile(store, name)
    del store.profiles[name]


def rename_profile(store, old_name, new_name):

    profile = lookup_profile(store, old_name)
    validate_name(new_name)
    if new_name == old_name:
        return profile
    if new_name in store.profiles:
        raise ProfileExistsError(new_name)

    # rebuild the mapping so the profile keeps its position
    store.profiles = {
        (new_name if name == old_name else name): value
        for name, value in store.profiles.items()
    }
    if store.default == old_name:
        store.default = new_name
    return profile


def set_default(store, name):

    lookup_profile(store, name)
    store.default = name


def resolve_name(requested_name, default_name):
    """Pick the profile a command works on.

    An explicitly requested name wins but must be a valid profile name, so
    neither empty nor the reserved word `default`. Without one,
    default_name is returned as is, possibly "".
    """

    if requested_name is not None:
        return validate_name(requested_name)
    return default_name


def effective_default(store):
    """the default profile name, or "" if it names no existing profile"""

    if store.default and store.default in store.profiles:
        return store.default
    return ''
