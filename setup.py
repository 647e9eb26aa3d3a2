from setuptools import setup, find_packages

setup(
    name="coast-forecast",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas",
        "requests",
        "openpyxl",
        "psycopg2-binary"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'coast-forecast=coast_forecast.main:main',
        ],
    },
)
