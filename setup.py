from setuptools import setup, find_packages


setup(
    name="pngme",
    version="0.1",
    packages=find_packages(include=["pngme", "pngme.*"]),
    description="Hide, reveal and remove secret messages stored in custom PNG chunks.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
        "argon2-cffi>=23.1.0",
    ],
    entry_points={
        "console_scripts": [
            "pngme=pngme.cli:main",
        ]
    },
)
