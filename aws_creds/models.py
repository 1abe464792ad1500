from typing import Dict

from pydantic import BaseModel, Field, model_validator


class PermanentCredentials(BaseModel):
    """Long-lived access key pair plus the MFA device that guards it"""

    access_key_id: str
    secret_access_key: str
    mfa_serial_number: str
    region: str


class TemporaryCredentials(BaseModel):
    """STS session credentials, expiration is '' until first fetched"""

    access_key_id: str = ''
    secret_access_key: str = ''
    session_token: str = ''
    expiration: str = ''

    @classmethod
    def empty(cls):
        return cls()


class Profile(BaseModel):

    permanent_credentials: PermanentCredentials
    temporary_credentials: TemporaryCredentials = Field(
        default_factory=TemporaryCredentials
    )


class ProfileStore(BaseModel):
    """Every profile keyed by name, plus the default pointer"""

    default: str = ''
    profiles: Dict[str, Profile] = {}

    @model_validator(mode='before')
    @classmethod
    def upgrade_profile_list(cls, data):
        # older stores kept a list of profiles each carrying its own name
        if not isinstance(data, dict) or \
                not isinstance(data.get('profiles'), list):
            return data

        profiles = dict()
        for entry in data['profiles']:
            if not isinstance(entry, dict) or \
                    not isinstance(entry.get('profile_name'), str):
                raise ValueError(
                    'profile list entries need a string `profile_name`'
                )
            name = entry['profile_name']
            if name in profiles:
                raise ValueError('duplicate profile name `{}`'.format(name))
            profiles[name] = dict(
                (key, value) for key, value in entry.items()
                if key != 'profile_name'
            )

        upgraded = dict(data)
        upgraded['profiles'] = profiles
        return upgraded

    @classmethod
    def empty(cls):

        return cls(default='', profiles=dict())
