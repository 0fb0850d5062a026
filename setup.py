from setuptools import setup, find_packages

setup(
    name="jobboard",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "pydantic>=2",
        "python-dotenv",
        "PyJWT",
        "passlib[bcrypt]",
        "bcrypt<4.1",
        "python-multipart",
    ],
    extras_require={
        "dev": [
            "pytest",
            "httpx",
            "black",
            "isort",
            "mypy",
        ],
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "jobboard-api=jobboard.app.main:run",
            "jobboard-init-db=jobboard.scripts.init_db:main",
            "jobboard-reconcile=jobboard.scripts.reconcile_counts:main",
        ],
    },
    author="",
    author_email="",
    description="Job board backend: accounts, postings and applications",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="job board, recruiting, fastapi",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
    ],
)
