"""Setup configuration for ZONEWATCH."""

from setuptools import find_packages, setup

setup(
    name="zonewatch",
    version="0.3.0",
    description="Control-chart zone classifier and pattern-rule engine for process metrics",
    author="ZONEWATCH",
    python_requires=">=3.11",
    packages=find_packages(where="src", include=["zonewatch*"]),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.26.0",
        "pandas>=2.2.0",
        "scipy>=1.11.0,<2",
        "statsmodels>=0.14.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
    ],
    entry_points={
        "console_scripts": [
            "zonewatch=zonewatch.cli:cli_entry",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-mock>=3.12.0",
        ],
    },
)
