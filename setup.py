"""ccbell package setup."""

from setuptools import setup, find_packages

setup(
    name="ccbell",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "PyYAML>=6.0",
        "rich>=13.0",
        "tzdata",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ccbell=ccbell.cli:cli",
        ],
    },
    python_requires=">=3.9",
)
