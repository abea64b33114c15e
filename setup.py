#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="redwire",
    description="Blocking RESP2 client for Redis with pipelines, transactions and pub/sub",
    long_description=open("README.md").read().strip(),
    long_description_content_type="text/markdown",
    keywords=["Redis", "RESP", "key-value store", "client"],
    license="MIT",
    version="1.0.0",
    packages=find_packages(
        include=[
            "redwire",
            "redwire.commands",
            "redwire.parsers",
        ]
    ),
    include_package_data=True,
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
)
