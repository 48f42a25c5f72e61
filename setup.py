
from setuptools import setup, find_packages

setup(
    name='checkpoint_parser',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'regex',
        'pydantic>=2',
        'PyYAML',
        'python-dateutil',
        'click',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'checkpoint-parser=checkpoint_parser.cli:main'
        ]
    }
)
