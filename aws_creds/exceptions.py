class AwsCredsError(Exception):
    """Base class for every error aws-creds reports to the user"""


class ConfigError(AwsCredsError):
    """The configuration directory or settings file is unusable"""


class StoreNotFoundError(AwsCredsError):
    """The credential store does not exist"""

    def __init__(self, path, *args):
        self.path = path
        if not args:
            args = ('unable to find file `{}`: please check the config path'
                    ' and try again'.format(path),)
        super(StoreNotFoundError, self).__init__(*args)


class StoreMalformedError(AwsCredsError):
    """The credential store exists but cannot be parsed"""

    def __init__(self, path, reason, *args):
        self.path = path
        self.reason = reason
        if not args:
            args = ('credential store `{}` is malformed: {}'.format(
                path, reason),)
        super(StoreMalformedError, self).__init__(*args)


class StoreIOError(AwsCredsError):
    """Any other failure reading or writing the credential store"""


class ProfileNotFoundError(AwsCredsError):
    """Named profile does not exist"""

    def __init__(self, name, *args):
        self.name = name
        if not args:
            args = ('profile `{}` doesn\'t exist'.format(name),)
        super(ProfileNotFoundError, self).__init__(*args)


class ProfileExistsError(AwsCredsError):
    """A profile with this name already exists"""

    def __init__(self, name, *args):
        self.name = name
        if not args:
            args = ('profile `{}` already exists'.format(name),)
        super(ProfileExistsError, self).__init__(*args)


class InvalidProfileNameError(AwsCredsError):
    """Reserved or empty profile name"""


class AuthError(AwsCredsError):
    """STS rejected the keys or the MFA code"""

    def __init__(self, code, *args):
        self.code = code
        super(AuthError, self).__init__(*args)


class TransportError(AwsCredsError):
    """STS could not be reached or failed to answer"""


class TimestampError(AwsCredsError):
    """Stored expiration timestamp is not RFC 3339"""
