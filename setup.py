# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="httplogger",
    version="1.2.0",
    description="Forward application errors and messages to a remote HTTP collector",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["httplogger", "httplogger.*"]),
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'httplogger=httplogger.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
