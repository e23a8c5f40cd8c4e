from setuptools import setup, find_packages

setup(
    name="formqa",
    version="0.0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "playwright>=1.52.0",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml",
        "pytest>=7",
        "pytest-asyncio>=0.23",
    ],
    scripts=["formqa-runner.py"],
    python_requires='>=3.10',
)
