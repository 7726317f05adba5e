# setup.py
from setuptools import setup, find_packages

setup(
    name="splitlog",
    version="1.0.0",
    description="Dual-stream, day-partitioned structured logging for applications and their data-access layer",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "requests",  # HTTP connectivity probe
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'splitlog=splitlog.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
