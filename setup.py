"""
Setup script for Spaceship-DNS.
"""

from setuptools import find_namespace_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = fh.read().splitlines()

setup(
    name="spaceship-dns-mcp",
    version="0.1.0",
    description="An MCP server for managing DNS records through the Spaceship registrar API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["spaceship_dns", "spaceship_dns.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    entry_points={
        "console_scripts": [
            "spaceship-dns-mcp=spaceship_dns.__main__:main",
        ],
    },
    include_package_data=True,
)
