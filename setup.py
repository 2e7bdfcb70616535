# setup.py
from setuptools import setup, find_packages

setup(
    name="cas",
    version="0.1.0",
    description="Lexer, Pratt parser and evaluator for algebraic expressions",
    packages=find_packages(include=["cas", "cas.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
