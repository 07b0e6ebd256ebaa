"""
transcription-cli - Utilities for Trane transcription courses

Installation:
    pip install -e .

This installs the 'transcription-cli' command in your environment.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='transcription-cli',
    version='1.0.0',
    description='Scaffold and verify Trane transcription courses',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='The Trane Project',
    license='MIT',

    packages=find_packages(exclude=['tests', 'tests.*', 'courses', 'courses.*']),

    python_requires='>=3.9',

    install_requires=[
        'click>=8.0',
        'requests>=2.28',
        'PyYAML>=6.0',
    ],

    extras_require={
        'dev': [
            'pytest>=7.4',
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
        ],
    },

    # CLI entry point - this creates the 'transcription-cli' command
    entry_points={
        'console_scripts': [
            'transcription-cli=transcription_cli.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Education',
    ],

    keywords='trane spaced-repetition music transcription courses',
)
