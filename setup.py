#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst', encoding='utf-8') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst', encoding='utf-8') as history_file:
    history = history_file.read()

requirements = ['Click>=8.0',
                'python-dotenv',
                'requests',
                ]

test_requirements = ['pytest']


setup(
    author="Michael Dereszynski",
    author_email='mlderes@hotmail.com',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Environment :: Console',
    ],
    description="Search for a city and see today's weather, themed for the time of day",
    entry_points={
        'console_scripts': [
            'wg=weather_glance.cli:main',
        ],
    },
    install_requires=requirements,
    extras_require={'test': test_requirements},
    license="GNU General Public License v3",
    long_description=readme + '\n\n' + history,
    include_package_data=True,
    keywords='weather_glance',
    name='weather_glance',
    packages=find_packages(include=['weather_glance']),
    python_requires='>=3.8',
    test_suite='tests',
    tests_require=test_requirements,
    url='https://github.com/mlderes/weather_glance',
    version='0.2.0',
    zip_safe=False,
)
