#!/usr/bin/env python
# -*- coding: utf-8 -*-


from setuptools import setup

readme = open('README.rst').read()
version = (0, 1, 0)

setup(
    name='tonal',
    python_requires=">=3.9",
    version=".".join(map(str, version)),
    description='Musical ratios and their rational approximations',
    long_description=readme,
    packages=[
        'tonal',
    ],
    include_package_data=True,
    install_requires=[
        "numpy",
        "tabulate",
    ],
    extras_require={
        "test": ["pytest"],
    },
    license="BSD",
    zip_safe=False,
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3.9'
    ],
    package_data={'tonal': ['py.typed']},
)
