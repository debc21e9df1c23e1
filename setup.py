"""
fock-sectors: quantum-number block decomposition of fermionic Fock spaces
"""

from setuptools import setup, find_packages

setup(
    name="fock-sectors",
    version="0.1.0",
    author="Masamichi Iizumi, Tamaki Iizumi",
    author_email="",
    description="Quantum-number block decomposition of fermionic Fock spaces",
    long_description=open("README.md").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["fock_sectors", "fock_sectors.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "typer>=0.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "fock-sectors=fock_sectors.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
