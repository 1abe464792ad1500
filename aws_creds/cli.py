from datetime import datetime, timezone
import functools
import json
import sys

import click

from . import __version__
from .constants import DEFAULT_REGION, STORE_PATH_ENV
from .exceptions import AwsCredsError, ConfigError, StoreNotFoundError
from .expiry import CredentialStatus, classify
from .log import logger, reset_logging, setup_logging
from .login import refresh_profile
from .models import PermanentCredentials, ProfileStore
from .paths import check_exists, ensure_parent_dir, get_default_log_path, \
    get_settings_path, resolve_path
from .profiles import create_profile, effective_default, lookup_profile, \
    remove_profile, rename_profile, resolve_name, set_default, validate_name
from .utils import load_store, read_settings, save_store


config_option = click.option(
    '-c', '--config',
    envvar=STORE_PATH_ENV,
    help='Path to the config file'
)
profile_option = click.option(
    '-p', '--profile',
    help='The name of the AWS profile'
)


def handle_errors(f):
    """print AwsCredsError to stderr and exit 1"""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except AwsCredsError as e:
            logger.error('%s failed: %s', f.__name__, e)
            click.secho('ERROR: {}'.format(e), fg='red', err=True)
            sys.exit(1)

    return wrapper


def audit(action, profile_names):

    result = dict()
    result['profiles'] = list(profile_names)
    result['timestamp'] = datetime.now().timestamp()
    result['action'] = action
    result['result'] = 'successful'
    logger.info(json.dumps(result))


def load_settings():

    try:
        settings_path = get_settings_path()
    except ConfigError:
        # without a home directory there is no settings file to read
        return dict()
    return read_settings(settings_path)


def init_logging(settings):

    log_file = settings.get('log_file')
    if not log_file:
        try:
            log_file = get_default_log_path()
        except ConfigError:
            return
    try:
        setup_logging(log_file)
    except OSError as e:
        # commands still run, only without an audit log
        reset_logging()
        click.secho(
            'WARNING: unable to open log file `{}`: {}'.format(
                log_file, e.strerror or e),
            fg='yellow',
            err=True
        )


def store_path(config, settings):

    return resolve_path(config or settings.get('store'))


def open_store(config, settings):
    """resolve, check and load the store, returning (path, store)"""

    path = check_exists(store_path(config, settings))
    return path, load_store(path)


def require_profile_name(requested_name, store):

    name = resolve_name(requested_name, effective_default(store))
    if not name:
        click.echo('Default profile is not set.', err=True)
        click.echo('Run the following command to set it.', err=True)
        click.secho('\taws-creds default PROFILE', fg='blue', err=True)
        sys.exit(1)
    return name


def prompt_required(text, **kwargs):

    while True:
        value = click.prompt(text, **kwargs)
        if value.strip():
            return value.strip()
        click.secho('{} cannot be empty!'.format(text), fg='red')


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """Makes it easy to manage and use temporary AWS credentials"""

    if ctx.invoked_subcommand is None:
        click.echo('ERROR: missing required arguments', err=True)
        click.echo('For a list of options, run `aws-creds --help`', err=True)
        ctx.exit(1)

    try:
        ctx.obj = load_settings()
        init_logging(ctx.obj)
    except AwsCredsError as e:
        click.secho('ERROR: {}'.format(e), fg='red', err=True)
        ctx.exit(1)


@cli.command('new')
@click.argument('profile-name', metavar='PROFILE')
@config_option
@click.pass_obj
@handle_errors
def new(settings, profile_name, config):
    """Create a new profile"""

    validate_name(profile_name)
    path = store_path(config, settings)
    try:
        store = load_store(check_exists(path))
    except StoreNotFoundError:
        ensure_parent_dir(path)
        store = ProfileStore.empty()

    if profile_name in store.profiles:
        overwrite = click.confirm(
            'WARNING: Profile `{}` already exists.'
            ' Would you like to overwrite?'.format(profile_name),
            default=False
        )
        if not overwrite:
            click.secho('Aborted!', fg='yellow')
            return

    make_default = click.confirm(
        'Would you like to set profile `{}` as default?'.format(profile_name),
        default=True
    )
    permanent_credentials = PermanentCredentials(
        access_key_id=prompt_required('AWS_ACCESS_KEY_ID', hide_input=True),
        secret_access_key=prompt_required(
            'AWS_SECRET_ACCESS_KEY',
            hide_input=True
        ),
        mfa_serial_number=prompt_required('AWS MFA Device Serial Number'),
        region=prompt_required(
            'AWS Region',
            default=settings.get('region') or DEFAULT_REGION
        )
    )
    create_profile(store, profile_name, permanent_credentials, make_default)
    save_store(store, path)
    audit('new', [profile_name])
    click.secho('Profile `{}` created.'.format(profile_name), fg='green')


@cli.command('show')
@profile_option
@config_option
@click.pass_obj
@handle_errors
def show(settings, profile, config):
    """Print temporary credentials formatted as environment variables"""

    _, store = open_store(config, settings)
    name = require_profile_name(profile, store)
    temporary_credentials = lookup_profile(store, name).temporary_credentials
    status = classify(temporary_credentials.expiration)
    if status is CredentialStatus.EMPTY:
        raise AwsCredsError(
            'the temporary credentials for profile `{}` haven\'t yet been'
            ' retrieved\nPlease run `aws-creds get` to fix'.format(name)
        )
    if status is CredentialStatus.EXPIRED:
        raise AwsCredsError(
            'the temporary credentials for profile `{}` have expired\n'
            'Please run `aws-creds get` to fix'.format(name)
        )
    click.echo(
        'AWS_ACCESS_KEY_ID={} AWS_SECRET_ACCESS_KEY={} AWS_SESSION_TOKEN={}'
        .format(
            temporary_credentials.access_key_id,
            temporary_credentials.secret_access_key,
            temporary_credentials.session_token
        )
    )


@cli.command('get')
@profile_option
@config_option
@click.pass_obj
@handle_errors
def get(settings, profile, config):
    """Retrieve new temporary credentials from AWS"""

    path, store = open_store(config, settings)
    name = require_profile_name(profile, store)
    lookup_profile(store, name)
    mfa_code = prompt_required('MFA Code')
    temporary_credentials = refresh_profile(
        store,
        name,
        mfa_code,
        path,
        duration_seconds=settings.get('session_duration')
    )
    click.secho(
        'Got new temporary credentials for profile `{}`'.format(name),
        fg='green'
    )
    click.echo('They will expire at "{}"'.format(
        temporary_credentials.expiration))


@cli.command('default')
@click.argument('profile-name', metavar='PROFILE')
@config_option
@click.pass_obj
@handle_errors
def default(settings, profile_name, config):
    """Sets a profile as default"""

    path, store = open_store(config, settings)
    set_default(store, profile_name)
    save_store(store, path)
    audit('default', [profile_name])
    click.secho(
        'Profile `{}` is now the default.'.format(profile_name),
        fg='green'
    )


@cli.command('remove')
@click.argument('profile-name', metavar='PROFILE')
@config_option
@click.pass_obj
@handle_errors
def remove(settings, profile_name, config):
    """Deletes a profile"""

    path, store = open_store(config, settings)
    was_default = store.default == profile_name
    remove_profile(store, profile_name)
    save_store(store, path)
    audit('remove', [profile_name])
    click.secho('Profile `{}` removed.'.format(profile_name), fg='green')
    if was_default and store.profiles:
        click.secho(
            'It was the default profile, run the following command to'
            ' choose another one.',
            fg='yellow'
        )
        click.secho('\taws-creds default PROFILE', fg='blue')


@cli.command('rename')
@click.argument('old-profile', metavar='OLD_PROFILE')
@click.argument('new-profile', metavar='NEW_PROFILE')
@config_option
@click.pass_obj
@handle_errors
def rename(settings, old_profile, new_profile, config):
    """Renames a profile"""

    path, store = open_store(config, settings)
    rename_profile(store, old_profile, new_profile)
    save_store(store, path)
    audit('rename', [old_profile, new_profile])
    click.echo('Profile `{}` renamed to `{}`'.format(old_profile, new_profile))


@cli.command('list')
@config_option
@click.pass_obj
@handle_errors
def ls(settings, config):
    """Print a list of all profile names.

    \b
    Annotations that may follow a profile name:
    - default: the default profile
    - expired: the temporary credentials have expired (fix with `aws-creds get`)
    - empty: the temporary credentials were never retrieved (fix with `aws-creds get`)
    """

    _, store = open_store(config, settings)
    if not store.profiles:
        click.secho('You don\'t have any profiles.', fg='red')
        click.echo('Run the following command to create one:')
        click.secho('\taws-creds new PROFILE', fg='blue')
        return

    default_name = effective_default(store)
    now = datetime.now(timezone.utc)
    for name, profile in sorted(
            store.profiles.items(),
            key=lambda item: item[0].lower()):
        annotations = [name]
        if name == default_name:
            annotations.append('<- default')
        status = classify(profile.temporary_credentials.expiration, now)
        if status is CredentialStatus.EMPTY:
            annotations.append('<- empty')
        elif status is CredentialStatus.EXPIRED:
            annotations.append('<- expired')
        click.echo(' '.join(annotations))


@cli.command('version')
def show_version():
    """Display the version of this tool"""

    click.echo('v{}'.format(__version__))


cli.add_command(remove, 'rm')
cli.add_command(rename, 'mv')
cli.add_command(ls, 'ls')


if __name__ == '__main__':
    cli()
