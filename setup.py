# setup.py
from setuptools import setup, find_packages

setup(
    name="lam-secd",
    version="0.1.0",
    description="Compiler and SECD-style machine for a small call-by-value functional language",
    packages=find_packages(include=["lam", "lam.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lam = lam.__main__:main"],
    },
    zip_safe=False,
)
