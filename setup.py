"""Setup configuration for flutter-autoreload package."""

from setuptools import setup, find_packages

setup(
    name="flutter-autoreload",
    version="0.1.0",
    description="Run flutter and hot reload automatically when Dart files change",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0.0",
        "rich>=13.0.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "watchdog>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "flutter-autoreload=flutter_autoreload.cli.app:main",
        ],
    },
)
