"""
Setup script for build tools that still call setup.py directly.
Modern installations should use pyproject.toml.
"""
from setuptools import setup

# Project metadata, dependencies and the winelab console script live in pyproject.toml
setup()
