from setuptools import setup, find_packages

setup(
    name="jobboard",
    version="1.0.0",
    packages=find_packages(include=["jobboard", "jobboard.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.27",
        "fastapi",
        "pydantic>=2",
        "python-dotenv",
        "PyJWT",
        "python-multipart",
        "logfire>=2.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "uvicorn",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "jobboard=jobboard.features.jobs.cli:main",
        ],
    },
    author="",
    author_email="",
    description="Async client and development backend for an online job board",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="job board, jobs, api client, fastapi",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
    ],
)
