"""Setup script for statsdzabbix."""

from setuptools import find_packages, setup

setup(
    name="statsdzabbix",
    version="0.1.0",
    description="A statsd flush backend that forwards aggregated metrics to Zabbix via zabbix_sender",
    author="statsdzabbix Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "simpy>=4.0",
        "numpy>=1.24",
        "pyyaml>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "statsdzabbix=statsdzabbix.cli:cli",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Monitoring",
    ],
)
