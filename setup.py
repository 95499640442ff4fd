"""
quarjar - Publish Quarto content to Skilljar

Installation:
    pip install -e .

This installs the 'quarjar' command in your environment.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='quarjar',
    version='1.0.0',
    description='Render Quarto documents and publish them to Skilljar',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',

    packages=find_packages(exclude=['tests', 'tests.*', 'docs']),

    include_package_data=True,

    python_requires='>=3.9',

    install_requires=[
        'click>=8.0',
        'PyYAML>=6.0',
        'requests>=2.28',
    ],

    extras_require={
        'dev': [
            'pytest>=7.4',
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
        ],
    },

    # CLI entry point - this creates the 'quarjar' command
    entry_points={
        'console_scripts': [
            'quarjar=quarjar.cli:cli',
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

    keywords='quarto skilljar lms education publishing',
)
