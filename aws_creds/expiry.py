from datetime import datetime, timezone
import enum
import re

from .exceptions import TimestampError


# full RFC 3339 date-time
RFC3339_PATTERN = re.compile(
    r'^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?'
    r'([Zz]|[+-]\d{2}:\d{2})$'
)
# a date-time cut off somewhere before its UTC offset
TRUNCATED_PATTERN = re.compile(
    r'^\d{1,4}(?:-\d{0,2}(?:-\d{0,2}(?:[Tt ]\d{0,2}(?::\d{0,2}'
    r'(?::\d{0,2}(?:\.\d*)?)?)?)?)?)?$'
)


class CredentialStatus(enum.Enum):
    """freshness of a profile's temporary credentials"""

    EMPTY = 'empty'
    EXPIRED = 'expired'
    VALID = 'valid'


def is_truncated(value):
    """True if value is the start of a timestamp that stops before its offset"""

    return TRUNCATED_PATTERN.match(value) is not None


def parse_timestamp(value):
    """parse an RFC 3339 timestamp into an aware datetime"""

    match = RFC3339_PATTERN.match(value.strip())
    if not match:
        raise TimestampError(
            'invalid expiration timestamp `{}`'.format(value)
        )
    date, time, fraction, offset = match.groups()
    # fromisoformat before 3.11 takes exactly 6 fraction digits and no Z
    if fraction:
        time += '.' + fraction[:6].ljust(6, '0')
    if offset in ('Z', 'z'):
        offset = '+00:00'
    try:
        return datetime.fromisoformat('{}T{}{}'.format(date, time, offset))
    except ValueError as e:
        raise TimestampError(
            'invalid expiration timestamp `{}`'.format(value)
        ) from e


def classify(expiration, now=None):
    """Classify a temporary-credential expiration string.

    "" means the credentials were never fetched, and so does a timestamp
    cut short before its UTC offset. A timestamp strictly before now is
    expired, anything else is valid. now defaults to the current UTC time.
    """

    if expiration == '' or is_truncated(expiration):
        return CredentialStatus.EMPTY
    if now is None:
        now = datetime.now(timezone.utc)
    if parse_timestamp(expiration) < now:
        return CredentialStatus.EXPIRED
    return CredentialStatus.VALID
