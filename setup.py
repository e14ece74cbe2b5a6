from setuptools import setup, find_packages

setup(
    name="ruletrace",
    version="0.1.0",
    description="Hierarchical, colored execution traces for policy rule evaluation",
    author="adamfilli",
    packages=find_packages(include=["ruletrace", "ruletrace.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
