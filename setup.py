from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mangler",
    version="0.1.0",
    description="Pattern-driven wordlist generation and rule-based word mutation.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Security",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"mangler.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=[
        "PyYAML",
        "jsonschema",
        "requests",
        "beautifulsoup4",
    ],
    extras_require={"dev": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["mangler=mangler.cli:main"]},
)
