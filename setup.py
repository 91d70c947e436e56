"""
tidydtm setuptools based setup module
"""

import os
from codecs import open

from setuptools import setup, find_packages

__title__ = 'tidydtm'
__version__ = '0.1.0'
__author__ = 'Markus Konrad'
__license__ = 'Apache License 2.0'


DEPS_BASE = ['numpy>=1.22.0', 'scipy>=1.7.0', 'pandas>=1.3.0']

DEPS_EXTRA = {
    'gensim': ['gensim>=4.1.0'],
    'test': ['pytest>=6.2.0', 'hypothesis>=6.35.0'],
    'dev': ['coverage>=6.2', 'pytest-cov>=3.0.0', 'twine>=3.7.0', 'tox>=3.24.0'],
}

DEPS_EXTRA['all'] = []
for k, deps in DEPS_EXTRA.items():
    if k != 'all':
        DEPS_EXTRA['all'].extend(deps)

here = os.path.abspath(os.path.dirname(__file__))

# Get the long description from the README file
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name=__title__,
    version=__version__,
    description='Conversion between tidy text tables and sparse document-term matrices',
    long_description=long_description,
    long_description_content_type='text/x-rst',

    author=__author__,
    author_email='markus.konrad@wzb.eu',

    license=__license__,

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',

        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',

        'Topic :: Scientific/Engineering :: Information Analysis',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],

    keywords='textmining textanalysis text mining document-term matrix tidy data sparse matrix',

    packages=find_packages(exclude=['tests', 'examples']),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=DEPS_BASE,
    extras_require=DEPS_EXTRA
)
