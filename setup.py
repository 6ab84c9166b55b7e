# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="gentree",
    version="0.1.0",
    description="Lazy single-file tree that materializes generated content only when it changes",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gentree*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'gentree=gentree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
