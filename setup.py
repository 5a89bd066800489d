from setuptools import setup, find_packages

setup(
    name="cartstore",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app"],
    install_requires=[
        "fastapi",
        "sqlalchemy[asyncio]",
        "psycopg[binary]",
        "aiosqlite",
        "pydantic",
        "pydantic-settings",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
)
