# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Setup configuration for sgx_quote package.

from setuptools import find_packages, setup

setup(
    name="sgx_quote",
    version="0.1.0",
    packages=find_packages(include=["sgx_quote", "sgx_quote.*"]),
    python_requires=">=3.8",
    install_requires=[
        "cryptography>=39.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
        "fuzz": ["atheris>=2.0"],
    },
    entry_points={
        "console_scripts": [
            "sgx-print=sgx_quote.print_quote:main",
        ],
    },
    description="Zero-copy decoder for Intel SGX DCAP quotes",
    author="Isaac Matthews",
    author_email="isaac@hpe.com",
    license="MIT",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
)
