#!/usr/bin/env python3
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="imgurl",
    version="0.1.0",
    author="Pictet STO",
    description="URL encoding and signing library and CLI for image CDN sources",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["urlcli", "config"],
    include_package_data=True,
    install_requires=[
        "click>=8.1.3",
        "pyyaml>=6.0",
        "tabulate>=0.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "imgurl=urlcli:cli",
        ],
    },
    python_requires=">=3.7",
)
