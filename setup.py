#!/usr/bin/env python3
"""
Setup script for the kualitas package

Installs the engine (kualitas) and its shared layer (kualitas_shared).
"""

from setuptools import setup, find_packages

setup(
    name="kualitas",
    version="2.0.0",
    description="Data-quality analysis and cleaning for Indonesian business spreadsheets",
    packages=find_packages(include=["kualitas", "kualitas.*", "kualitas_shared", "kualitas_shared.*"]),
    python_requires=">=3.9",
    install_requires=[
        # 📋 Data Validation & Settings
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",

        # 📊 Data Processing
        "pandas>=2.1.3",
        "numpy>=1.24.3",

        # 🔍 Validation
        "email-validator>=2.0.0",
        "phonenumbers>=8.13.0",

        # 🔤 Fuzzy Matching
        "rapidfuzz>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
        ],
    },
    package_data={
        "kualitas_shared": ["py.typed"],
    },
)
