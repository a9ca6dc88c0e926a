from setuptools import setup, find_packages

setup(
    name="connectn",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # Gymnasium environment for learning agents
        "filelock",   # Locking for the statistics JSON file
    ],
    extras_require={
        "test": ["pytest"],
    },
)
