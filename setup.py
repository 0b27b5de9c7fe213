from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="magpie-sdk",
    version="0.1.0",
    description="Python SDK for the Magpie Payment API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Magpie SDK Team",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Financial",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.25.2",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "structlog>=23.2.0",
        "tenacity>=8.2.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
        ],
    },
)
