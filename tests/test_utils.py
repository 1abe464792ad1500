"""test suite for reading and writing the credential store."""
import json
import os
import stat

import pytest

from aws_creds.exceptions import ConfigError, StoreIOError, \
    StoreMalformedError, StoreNotFoundError
from aws_creds.models import ProfileStore
from aws_creds.utils import load_store, read_settings, save_store

from conftest import make_profile


class TestLoadStore:
    def test_load(self, store_path):
        store = load_store(store_path)

        assert store.default == 'alice'
        assert sorted(store.profiles) == ['alice', 'bob', 'carol']
        bob = store.profiles['bob']
        assert bob.permanent_credentials.access_key_id == 'bob_access_key_id'
        assert bob.temporary_credentials.expiration == ''

    def test_missing_file_is_not_found(self, tmp_path):
        with pytest.raises(StoreNotFoundError):
            load_store(str(tmp_path / 'creds.json'))

    def test_invalid_json_is_malformed(self, tmp_path):
        path = tmp_path / 'creds.json'
        path.write_text('{not json')

        with pytest.raises(StoreMalformedError) as excinfo:
            load_store(str(path))
        assert 'invalid JSON' in str(excinfo.value)

    def test_wrong_shape_is_malformed(self, tmp_path):
        path = tmp_path / 'creds.json'
        path.write_text(json.dumps({
            'default': 'alice',
            'profiles': {'alice': {'permanent_credentials': {'region': 'us-east-1'}}},
        }))

        with pytest.raises(StoreMalformedError) as excinfo:
            load_store(str(path))
        assert 'access_key_id' in excinfo.value.reason

    def test_non_object_document_is_malformed(self, tmp_path):
        path = tmp_path / 'creds.json'
        path.write_text('[]')

        with pytest.raises(StoreMalformedError):
            load_store(str(path))

    def test_directory_is_io_error(self, tmp_path):
        with pytest.raises(StoreIOError):
            load_store(str(tmp_path))

    def test_legacy_profile_list(self, tmp_path):
        alice = make_profile('alice')
        alice['profile_name'] = 'alice'
        path = tmp_path / 'creds.json'
        path.write_text(json.dumps({'default': 'alice', 'profiles': [alice]}))

        store = load_store(str(path))

        assert list(store.profiles) == ['alice']
        assert store.profiles['alice'].permanent_credentials.region == 'us-east-1'

    def test_legacy_profile_list_with_duplicates_is_malformed(self, tmp_path):
        entries = []
        for _ in range(2):
            entry = make_profile('alice')
            entry['profile_name'] = 'alice'
            entries.append(entry)
        path = tmp_path / 'creds.json'
        path.write_text(json.dumps({'default': 'alice', 'profiles': entries}))

        with pytest.raises(StoreMalformedError) as excinfo:
            load_store(str(path))
        assert 'duplicate' in excinfo.value.reason


class TestSaveStore:
    def test_round_trip(self, store_path, store_document):
        save_store(load_store(store_path), store_path)

        with open(store_path) as f:
            assert json.load(f) == store_document

    def test_writes_mapping_form_for_legacy_input(self, tmp_path):
        alice = make_profile('alice')
        alice['profile_name'] = 'alice'
        path = tmp_path / 'creds.json'
        path.write_text(json.dumps({'default': 'alice', 'profiles': [alice]}))

        save_store(load_store(str(path)), str(path))

        saved = json.loads(path.read_text())
        assert saved == {'default': 'alice', 'profiles': {'alice': make_profile('alice')}}

    def test_owner_only_permissions(self, tmp_path):
        path = tmp_path / 'creds.json'
        save_store(ProfileStore.empty(), str(path))

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        assert json.loads(path.read_text()) == {'default': '', 'profiles': {}}

    def test_leaves_no_temporary_files(self, tmp_path):
        path = tmp_path / 'creds.json'
        save_store(ProfileStore.empty(), str(path))
        save_store(ProfileStore.empty(), str(path))

        assert os.listdir(tmp_path) == ['creds.json']

    def test_missing_directory_is_io_error(self, tmp_path):
        with pytest.raises(StoreIOError):
            save_store(ProfileStore.empty(), str(tmp_path / 'missing' / 'creds.json'))


class TestReadSettings:
    def test_missing_file(self, tmp_path):
        assert read_settings(str(tmp_path / 'settings.toml')) == {}

    def test_read(self, tmp_path):
        path = tmp_path / 'settings.toml'
        path.write_text(
            'store = "/srv/creds.json"\n'
            'region = "eu-central-1"\n'
            'session_duration = 3600\n'
        )

        settings = read_settings(str(path))

        assert settings['store'] == '/srv/creds.json'
        assert settings['region'] == 'eu-central-1'
        assert settings['session_duration'] == 3600

    def test_unparseable(self, tmp_path):
        path = tmp_path / 'settings.toml'
        path.write_text('region = ')

        with pytest.raises(ConfigError):
            read_settings(str(path))

    def test_wrong_type(self, tmp_path):
        path = tmp_path / 'settings.toml'
        path.write_text('session_duration = "an hour"\n')

        with pytest.raises(ConfigError) as excinfo:
            read_settings(str(path))
        assert 'session_duration' in str(excinfo.value)
