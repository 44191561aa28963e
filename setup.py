#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import re

from setuptools import setup


def get_version(package):
    """
    Return package version as listed in `__version__` in `init.py`.
    """
    init_py = open(os.path.join(package, "__init__.py")).read()
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", init_py).group(1)


def get_long_description():
    """
    Return the README.
    """
    return open("README.md", "r", encoding="utf8").read()


def get_packages(package):
    """
    Return root package and all sub-packages.
    """
    return [
        dirpath
        for dirpath, dirnames, filenames in os.walk(package)
        if os.path.exists(os.path.join(dirpath, "__init__.py"))
    ]


setup(
    name="practice-api",
    version=get_version("practice_api"),
    license="BSD",
    description="LLM-style token streaming demo server (SSE, NDJSON, JSON)",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=get_packages("practice_api"),
    python_requires=">=3.8",
    install_requires=[
        "starlette>=0.37",
        "anyio>=4.0",
        "uvicorn>=0.24,<0.50",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx>=0.27",
            "asgi-lifespan",
        ],
    },
    entry_points={
        "console_scripts": ["practice-api=practice_api.__main__:main"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
        "Programming Language :: Python :: 3",
    ],
)
