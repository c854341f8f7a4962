from setuptools import find_packages, setup

# Basic metadata
VERSION = "1.0.0"

setup(
    name="github-webhook-resource",
    version=VERSION,
    description="Concourse resource that creates and deletes GitHub repository webhooks.",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.27",
        "certifi",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "typer>=0.12",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        # Concourse runs /opt/resource/{check,in,out}; the image wraps these subcommands
        "console_scripts": [
            "webhook-resource=webhook_resource.cli.main:app",
        ],
    },
)
