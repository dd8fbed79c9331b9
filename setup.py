from setuptools import setup, find_packages

setup(
    name="usdjpy-volatility",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["models", "analyze_usdjpy"],
    install_requires=[
        "numpy",
        "pandas",
        "arch",
        "statsmodels",
        "matplotlib",
        "seaborn",
        "tabulate",
        "tqdm",
        "psutil",
    ],
    extras_require={
        "test": ["pytest", "scipy"],
    },
    python_requires=">=3.8",
)
