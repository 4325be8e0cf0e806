"""Setup script for the tsmatch package."""

from setuptools import setup, find_packages

setup(
    name="tsmatch",
    version="0.1.0",
    description="Exact template switch inner seeds between a reference and a query genome",
    packages=find_packages(include=["tsmatch", "tsmatch.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22",
        "psutil>=5.9",
        "fastapi>=0.95",
        "pydantic>=1.10",
        "python-multipart>=0.0.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24",
        ],
    },
    entry_points={
        "console_scripts": [
            "tsmatch=tsmatch.main:main",
        ],
    },
    zip_safe=False,
)
