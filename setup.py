# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="jinjaview",
    version="0.1.0",
    description="Jinja2 view layer with per-plugin template tree scanning",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["jinjaview*"]),
    python_requires=">=3.8",
    install_requires=[
        "Jinja2>=3.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'jinjaview=jinjaview.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
