# setup.py
from setuptools import setup, find_packages

setup(
    name="link_scout",
    version="0.1.0",
    description="Проверка внутренних ссылок и телефонных номеров в дереве контента",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"link_scout": ["templates/*.j2"]},
    install_requires=[
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["link-scout=link_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
