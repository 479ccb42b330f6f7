#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for the unitconv terminal unit converter.
"""

from pathlib import Path

from setuptools import find_packages, setup

VERSION = "1.0.0"

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")
else:
    long_description = "Interactive terminal unit converter with persistent history"

setup(
    name="unitconv",
    version=VERSION,
    description="Interactive terminal unit converter with persistent conversion history",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["unitconv", "unitconv.*"]),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.12.0",
        "rich>=13.7.0",
        "pydantic>=2.5.0",
        "pyyaml>=6.0.1",
        "click>=8.1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "unitconv=unitconv.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
        "Topic :: Utilities",
    ],
    keywords="units conversion cli terminal",
)
