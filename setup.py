"""Package setup for css_url_parser."""

from setuptools import setup, find_packages

setup(
    name="css-url-parser",
    version="1.0.0",
    description="Extract and rewrite url() / image-set() references in CSS values",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "tinycss2>=1.2.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "requests>=2.31.0",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "tqdm>=4.66.0",
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "css-url-parser=css_url_parser.cli:main",
        ],
    },
)
