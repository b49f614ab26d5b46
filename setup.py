"""Setup script for scitypes."""
from setuptools import find_packages, setup


setup(
    name="scitypes",
    version="0.1.0",
    description="Scientific types and representation coercion for tabular data",
    packages=find_packages(include=["scitypes", "scitypes.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas>=1.5",
    ],
    extras_require={
        "arrow": ["pyarrow"],
        "test": ["pytest", "pyarrow"],
    },
)
