from setuptools import setup, find_packages

setup(
    name="lotto_exclusion",
    version="1.0.0",
    packages=find_packages(include=["lotto_exclusion", "lotto_exclusion.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "scipy>=1.7.0",
        "matplotlib>=3.4.0",
        "openpyxl>=3.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "lotto-backtest=lotto_exclusion.run_backtest:main",
        ],
    },
    author="Aaron",
    description="6/45 lotto exclusion-number scoring with leakage-safe historical backtest",
)
