# setup.py
from setuptools import setup, find_packages

setup(
    name="cilisp",
    version="0.1.0",
    description="Tree-walking evaluator for CI LISP s-expression arithmetic",
    packages=find_packages(include=["cilisp", "cilisp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["cilisp=cilisp.__main__:main"],
    },
    zip_safe=False,
)
