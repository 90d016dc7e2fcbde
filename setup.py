#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="clavis",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Tokenizer for KMonad-style keyboard configuration files",
    long_description="TODO",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Interpreters",
        "Topic :: System :: Hardware",
    ],
    keywords=[
        "kmonad",
        "keyboard",
        "parser",
    ],
    python_requires=">=3.10",
    install_requires=[
        "attrs",
        "cattrs",
        "msgspec",
        "pygtrie>=2.4.2",
        "pyparsing>=3.0.0",
    ],
    tests_require=["pytest>=6.2.4"],
    extras_require={
        "test": ["pytest>=6.2.4"],
    },
    setup_requires=[
        "setuptools>=30.3.0",
        "wheel",
    ],
)
