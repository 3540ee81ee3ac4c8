import re
from pathlib import Path

from setuptools import setup, find_packages


def _read_version():
    """Pull MAJOR/MINOR/PATCH/PHASE out of _version.py without importing it."""
    text = (Path(__file__).parent / "src" / "colortag" / "_version.py").read_text(encoding="utf-8")
    parts = dict(re.findall(r'^(MAJOR|MINOR|PATCH|PHASE) = "?(\w+)"?', text, re.M))
    version = f"{parts['MAJOR']}.{parts['MINOR']}.{parts['PATCH']}"
    phase = {"alpha": "a0", "beta": "b0", "None": ""}.get(parts.get("PHASE"), parts.get("PHASE", ""))
    return version + phase


setup(
    name="colortag",
    version=_read_version(),
    description="Gated diagnostic logging with deterministic color-coded source tags",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest", "pytest-cov"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
