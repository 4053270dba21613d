from setuptools import setup, find_packages

setup(
    name="tokenline",
    version="0.1.0",
    description="Interactive terminal chat that streams Azure OpenAI completions token by token",
    packages=find_packages(include=["tokenline", "tokenline.*"]),
    install_requires=[
        "httpx",
        "rich",
        "prompt-toolkit",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "tokenline=tokenline.cli:main",
        ],
    },
    python_requires=">=3.12",
)
