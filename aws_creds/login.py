from datetime import datetime
import json

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .constants import TRANSIENT_STS_ERROR_CODES
from .exceptions import AuthError, TransportError
from .log import logger
from .models import TemporaryCredentials
from .profiles import lookup_profile
from .utils import save_store


def create_sts_client(permanent_credentials):
    """sts client signed with the profile's own keys only"""

    session = boto3.session.Session(
        aws_access_key_id=permanent_credentials.access_key_id,
        aws_secret_access_key=permanent_credentials.secret_access_key,
        region_name=permanent_credentials.region
    )
    return session.client('sts')


def classify_client_error(error):
    """turn a botocore ClientError into AuthError or TransportError"""

    err = error.response.get('Error', {})
    code = err.get('Code', '')
    message = err.get('Message') or str(error)
    status = error.response.get('ResponseMetadata', {}).get('HTTPStatusCode', 0)
    if code in TRANSIENT_STS_ERROR_CODES or status >= 500:
        return TransportError(
            'AWS STS failed to answer ({}): {}'.format(code or status, message)
        )
    return AuthError(code, 'failed to get session token ({}): {}'.format(
        code, message))


def get_session_token(permanent_credentials, mfa_code, duration_seconds=None,
                      client=None):
    """Exchange permanent keys and an MFA code for session credentials"""

    params = {
        'SerialNumber': permanent_credentials.mfa_serial_number,
        'TokenCode': mfa_code,
    }
    if duration_seconds:
        params['DurationSeconds'] = duration_seconds

    try:
        if client is None:
            client = create_sts_client(permanent_credentials)
        response = client.get_session_token(**params)
    except ClientError as e:
        raise classify_client_error(e) from e
    except BotoCoreError as e:
        raise TransportError('unable to reach AWS STS: {}'.format(e)) from e

    credentials = response.get('Credentials')
    if not credentials:
        raise TransportError('no credentials returned in response')

    expiration = credentials['Expiration']
    if isinstance(expiration, datetime):
        expiration = expiration.isoformat()
    return TemporaryCredentials(
        access_key_id=credentials['AccessKeyId'],
        secret_access_key=credentials['SecretAccessKey'],
        session_token=credentials['SessionToken'],
        expiration=expiration
    )


def refresh_profile(store, profile_name, mfa_code, filename,
                    duration_seconds=None, exchange=None):
    """Fetch new temporary credentials for a profile and save the store.

    The store is only touched after the exchange succeeded, so a failed
    exchange leaves both the in-memory store and the file unchanged.
    """

    if exchange is None:
        exchange = get_session_token

    result = dict()
    result['profiles'] = [profile_name]
    result['timestamp'] = datetime.now().timestamp()
    result['action'] = 'get'
    try:
        profile = lookup_profile(store, profile_name)
        temporary_credentials = exchange(
            profile.permanent_credentials,
            mfa_code,
            duration_seconds
        )
        profile.temporary_credentials = temporary_credentials
        save_store(store, filename)
    except AuthError as e:
        result['result'] = 'failed'
        result['reason'] = 'rejected by sts ({})'.format(e.code)
        raise
    except TransportError:
        result['result'] = 'failed'
        result['reason'] = 'sts unreachable'
        raise
    except Exception as e:
        result['result'] = 'failed'
        result['reason'] = type(e).__name__
        raise
    else:
        result['result'] = 'successful'
        result['expiration'] = temporary_credentials.expiration
    finally:
        logger.info(json.dumps(result))

    return temporary_credentials
