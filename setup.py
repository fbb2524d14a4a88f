# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.1.0",
    description="A small Lisp with S-expressions, Q-expressions and curried closures",
    packages=find_packages(include=["lispy", "lispy.*"]),
    # Ship the standard prelude alongside the package
    package_data={"lispy": ["prelude/*.lspy"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lispy=lispy.repl:main"],
    },
    zip_safe=False,
)
