from setuptools import setup, find_packages

setup(
    name="normalarb",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "scipy",
        "pydantic>=2",
        "pydantic-settings[toml]>=2.2",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
        ],
    },
)
