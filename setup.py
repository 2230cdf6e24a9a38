"""setup.py"""
from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="infradrift",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="Verify that cloud resources declared in an infra manifest still exist",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    install_requires=[
        "boto3>=1.34.0",
        "pydantic>=2.5.0",
        "structlog>=23.1.0",
        "toml>=0.10.2",
    ],
    extras_require={
        "gcp": [
            "google-api-core>=2.15.0",
            "google-cloud-artifact-registry>=1.11.0",
            "google-cloud-iam>=2.14.0",
            "google-cloud-run>=0.10.0",
            "google-cloud-secret-manager>=2.18.0",
        ],
        "test": [
            "google-api-core>=2.15.0",
            "moto>=5.0.0",
            "pytest>=7.4.0",
        ],
    },
    scripts=["bin/infra_scan.py", "bin/infra_generate.py"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
