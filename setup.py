"""
Setup script for the struct-to-form encoder.
"""
from setuptools import setup, find_packages

setup(
    name="form-encoder",
    version="1.0.0",
    description="Flatten structured values into HTTP form key/value pairs",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "main"],
    install_requires=[
        "requests>=2.31.0",
        "tenacity>=8.2.3",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.1",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": ["form-encode=main:main"],
    },
    python_requires=">=3.9",
)
