from setuptools import setup, find_namespace_packages

setup(
    name="tracerelay",
    version="0.1.0a0",
    description="Listener-broadcast trace facade with severity gates, auto-flush and logging mirroring",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["tracerelay*"]),
    install_requires=[],
    extras_require={
        "dev": ["pytest>=7.0", "pytest-cov"],
    },
    entry_points={
        "console_scripts": ["tracerelay=tracerelay.cli:main"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
