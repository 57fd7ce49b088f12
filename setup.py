from setuptools import setup, find_packages

setup(
    name="smbshare-linux",
    version="1.0.0",
    description="Stream-based file operations on SMB shares through the smbclient command-line tool",
    author="totekuh",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "impacket>=0.11.0",
        "typer>=0.12.0",
        "rich>=13.0.0",
        "toml>=0.10.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "smbshare=smbshare.cli.main:app",
        ]
    },
)
