"""
BumpBoard Setup Script
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="bumpboard",
    version="0.1.0",
    author="BumpBoard Project",
    description="Minimal ephemeral discussion boards with bump ordering and expiry",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Message Boards",
    ],
    python_requires=">=3.10",
    install_requires=[
        "cryptography>=41.0.0",
        "flask>=3.0.0",
        "markdown-it-py>=3.0.0",
        "bleach>=6.0.0",
        "markupsafe>=2.1.0",
        "werkzeug>=3.0.0",
        "tomli>=2.0.0;python_version<'3.11'",
        "toml>=0.10.2",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bumpboard=bumpboard.__main__:main",
        ],
    },
)
