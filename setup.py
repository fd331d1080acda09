from setuptools import setup, find_packages

setup(
    name="cons-smacof",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        "numpy",
        "pydantic",
        "shapely",
        "networkx",
        "fastapi",
        "uvicorn",
        "pandas",
        "matplotlib",
        "seaborn"
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx"
        ]
    }
)
