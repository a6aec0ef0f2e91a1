"""
Setup script for the propstack configuration package.
"""

from setuptools import setup, find_packages

setup(
    name="propstack",
    version="1.0.0",
    description="Layered configuration resolution with profiles, typed lookups and masking",
    author="propstack Team",
    packages=find_packages(include=["propstack", "propstack.*"]),
    package_data={
        "propstack.resources": ["*.properties", "environments/*.properties"],
    },
    python_requires=">=3.9",
    install_requires=[
        # Core dependencies
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "propstack=propstack.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
