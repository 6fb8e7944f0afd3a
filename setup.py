"""Setup configuration for cleanblog."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="cleanblog",
    version="0.1.0",
    author="cleanblog Team",
    author_email="team@cleanblog.dev",
    description="Layered blogging backend: articles, users, cache-aside reads and a central error taxonomy",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
        "rich>=13.7.0",
        "sqlalchemy[asyncio]>=2.0.25",
        "asyncpg>=0.29.0",
        "redis>=5.0.1",
        "python-jose[cryptography]>=3.3.0",
        "passlib[bcrypt]>=1.7.4",
        # passlib 1.7.4 cannot load newer bcrypt backends
        "bcrypt>=4.0.1,<4.1",
    ],
    entry_points={
        "console_scripts": [
            "cleanblog=cleanblog.cli.main:cli",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=7.4.4",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.23.3",
            "pytest-mock>=3.12.0",
            "aiosqlite>=0.19.0",
            "black>=24.1.0",
            "isort>=5.13.2",
            "flake8>=7.0.0",
            "mypy>=1.8.0",
        ],
    },
    include_package_data=True,
    package_data={
        "cleanblog": [
            "configs/*.yaml",
        ],
    },
)
