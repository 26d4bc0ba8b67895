#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()

with open('requirements.txt', 'r') as f:
    requirements = [_.strip() for _ in f.readlines() if _.strip() and not _.startswith('-')]

with open('src/negboa/__init__.py') as f:
    version = [_ for _ in f.readlines() if _.startswith('__version__')][0]
    version = version.split('"')[-2]

test_requirements = ['pytest', 'hypothesis']

setup(
    author="negboa developers",
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    description='Decision core of a bilateral BOA negotiation agent',
    install_requires=requirements,
    extras_require={'test': test_requirements},
    python_requires='>=3.9',
    long_description=readme + '\n\n' + history,
    include_package_data=True,
    keywords='negotiation BOA opponent-model bidding acceptance agents',
    name='negboa',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    test_suite='tests',
    tests_require=test_requirements,
    version=version,
    zip_safe=False,
)
