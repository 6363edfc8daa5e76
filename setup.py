"""
Setup script for binormal.

Installs the ``binormal`` package from the ``src`` layout.
"""

from setuptools import find_packages, setup

setup(
    name="binormal",
    version="0.1.0",
    description="Two-component Gaussian mixture with closed-form moments and ML fitting",
    author="PySATL project",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=2.0",
        "scipy>=1.13",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
)
