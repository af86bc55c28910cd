#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: setup.py
# Project: textsense
# Description: 
# Created: 2025-05-22 09:48:15
# Modified: 2025-06-03 15:22:09

from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent

def read_requirements():
    return [
        line.strip()
        for line in (here / "requirements.txt").read_text().splitlines()
        if line and not line.startswith("#")
    ]

setup(
    name="textsense",
    version="0.2.0",
    description="On-device text analysis engine: language, sentiment, entities, keywords, topics and summaries",
    long_description=(here / "README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["textsense", "textsense.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "textsense = textsense.cli:main",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
