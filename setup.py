#!/usr/bin/env python3
"""
Setup script for approxkit

Error-aware reduction and comparison primitives: compensated summation,
online moments, tolerance comparison and log-domain arithmetic.
"""

from pathlib import Path

from setuptools import setup, find_packages

# Package metadata
PACKAGE_NAME = "approxkit"
VERSION = "1.0.0"
DESCRIPTION = "Compensated summation, online moments, tolerance comparison and log-domain numbers"
AUTHOR = "approxkit contributors"
LICENSE = "MIT"


# Read long description from README
def read_readme():
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return DESCRIPTION


# Package requirements
def get_requirements():
    """Get package requirements."""
    base_requirements = [
        "numpy>=1.19.0",
        "torch>=1.9.0",
    ]

    test_requirements = [
        "pytest>=6.0",
        "pytest-cov>=2.0",
    ]

    dev_requirements = test_requirements + [
        "black>=21.0",
        "flake8>=3.8",
        "mypy>=0.900",
        "matplotlib>=3.3",
    ]

    return {
        "base": base_requirements,
        "test": test_requirements,
        "dev": dev_requirements,
    }


def main():
    """Main setup function."""
    requirements = get_requirements()

    setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description=DESCRIPTION,
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        author=AUTHOR,
        license=LICENSE,

        # Package configuration
        packages=find_packages(include=["approxkit", "approxkit.*"]),

        # Dependencies
        install_requires=requirements["base"],
        extras_require={
            "test": requirements["test"],
            "dev": requirements["dev"],
        },
        python_requires=">=3.8",

        classifiers=[
            "Development Status :: 5 - Production/Stable",
            "Intended Audience :: Science/Research",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Scientific/Engineering :: Mathematics",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Operating System :: OS Independent",
        ],
        keywords=[
            "numerical", "summation", "kahan", "neumaier", "welford",
            "floating-point", "tolerance", "log-domain", "error-correction",
        ],
        zip_safe=True,
    )


if __name__ == "__main__":
    main()
