# SPDX-FileCopyrightText: 2025 Quorum Gate contributors
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="quorum-gate",
    version="0.1.0",
    description="Threshold secret-sharing gate for a single one-way transition",
    author="Quorum Gate contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click<9.0,>=8.1",
        "cryptography>=41.0",
        "prometheus-client<1.0,>=0.16.0",
        "PyYAML<7.0,>=6.0",
    ],
    extras_require={
        # dev / тестирование
        "test": [
            "pytest>=8.0.0",
            "pytest-cov>=5.0.0",
            "pytest-timeout>=2.3.0",
            "hypothesis>=6.0.0",
        ],
        # линтеры и форматтеры
        "lint": [
            "ruff>=0.2.0",
            "black>=23.1.0",
            "isort>=5.10.1",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quorum-gate=quorum_gate.cli:main",
        ],
    },
)
