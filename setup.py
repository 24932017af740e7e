#!/usr/bin/env python
""" Parameter validation library: casts untrusted input into typed data, or reports every error at once """

from setuptools import setup, find_packages

setup(
    # http://pythonhosted.org/setuptools/setuptools.html
    name='goal',
    version='0.1.0',

    license='MIT',
    description=__doc__,
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords=['validation', 'params', 'schema'],

    packages=find_packages(exclude=('tests', 'tests.*', 'misc', 'misc.*')),
    scripts=[],
    entry_points={},

    python_requires='>= 3.7',
    install_requires=[
    ],
    extras_require={
        'test': ['pytest'],
    },
    include_package_data=True,

    platforms='any',
    classifiers=[
        # https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
