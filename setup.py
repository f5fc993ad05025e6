from setuptools import setup, find_packages

setup(
    name="hyperbitbit",
    version="0.1.0",
    description="HyperBitBit cardinality estimation in 17 bytes",
    author="adamfilli",
    packages=find_packages(include=["hyperbitbit", "hyperbitbit.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
