from setuptools import setup, find_packages

setup(
    name='srp6a',
    version='0.1.0',
    description='Secure Remote Password (SRP-6a) protocol engine',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    python_requires='>=3.8',
    install_requires=[
        'click>=8.0.0',
        'cryptography>=41.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'srp6=srp6.cli.commands:main',
        ],
    },
)
