import sys

from setuptools import find_packages, setup

version = {}
with open("vdspiral/version.py", "r") as f:
    exec(f.read(), version)

if sys.version_info < (3, 6):
    sys.exit("Sorry, Python < 3.6 is not supported")

REQUIRED_PACKAGES = ["numpy", "numba", "scipy", "tqdm"]

with open("README.rst", "r") as f:
    long_description = f.read()

setup(
    name="vdspiral",
    version=version["__version__"],
    description="Variable density spiral gradient and trajectory design "
                "for MRI.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD",
    packages=find_packages(exclude=["tests", "tests.*", "benchmarks"]),
    install_requires=REQUIRED_PACKAGES,
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
    ],
)
