from setuptools import setup

from aws_creds import __version__

setup(
    name='aws-creds',
    version=__version__,
    description='Manage permanent and MFA-backed temporary AWS credential profiles.',
    packages=['aws_creds'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'boto3',
        'botocore',
        'Click',
        'pydantic>=2',
        'toml'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
    entry_points='''
        [console_scripts]
        aws-creds = aws_creds.cli:cli
    ''',
)
