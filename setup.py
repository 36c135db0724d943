"""
Setup script for the career-studio job analysis project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="career-studio-job-analysis",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    py_modules=["version"],
    python_requires=">=3.11",
    install_requires=[
        "langchain-core>=0.3",
        "langchain-openai>=0.2",
        "langchain-anthropic>=0.2",
        "python-dotenv>=1.0",
        "pydantic>=2.0",
        "json-repair>=0.25",
        "requests>=2.31",
        "beautifulsoup4>=4.12",
        "playwright>=1.40",
        "fastapi>=0.110",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
)
