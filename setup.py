#!/usr/bin/env python3
from setuptools import setup
import os

here = os.path.dirname(os.path.abspath(__file__))
ver = os.environ.get("PKGVER") or "0.1.0"

reqs = []
with open(os.path.join(here, 'requirements.txt')) as f:
    for l in f:
        l = l.strip()
        if l and not l.startswith('#'):
            reqs.append(l)

setup(
    name = 'tunr',
    packages = [
        'tunr',
        'tunr.types',
        ],
    version = ver,
    description = 'Artists, songs and favorites',
    install_requires = reqs,
    extras_require = {
        'test': ['pytest'],
    },
    license = 'MIT',
    package_data={
        'tunr': [
            'templates/*.html',
            'templates/artists/*.html',
        ],
    },
)
