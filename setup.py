"""Setup file for amqpgen."""
from setuptools import find_packages, setup

setup(
    name="amqpgen",
    version="0.1.0",
    description="Generate typed AMQP method and header codecs from a protocol schema.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.11",
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "amqpgen=amqpgen.cli.main:main",
        ],
    },
)
