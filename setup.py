# setup.py
from setuptools import setup, find_packages

setup(
    name="product-schema",            # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=("tests", "tests.*")),   # will find product_schema/
    install_requires=["pandas", "numpy"],
    extras_require={"test": ["pytest"]},
    include_package_data=True,        # so we can bundle the JSON schemas
    package_data={
        "product_schema": ["schemas/*.json"],
    },
    entry_points={
        "console_scripts": ["product-schema=product_schema.cli:main"],
    },
    python_requires=">=3.9",
    description="Schema-gated lead storage: product schemas, lead validation, schema checks",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
