# setup.py
from setuptools import setup, find_packages

setup(
    name="typeshape",                 # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),  # typeshape/ and typeshape.types/
    python_requires=">=3.11",         # kw_only dataclasses, datetime.fromisoformat("...Z")
    install_requires=[
        "pandas",        # DataFrame row validation in typeshape.frame
        "phonenumbers",  # country-code lookup for the Phone kind
    ],
    description="Declarative schema validation and data coercion with JSON Schema export",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
