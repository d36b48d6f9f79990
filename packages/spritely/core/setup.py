from setuptools import find_packages, setup

# Find all packages - physical structure matches import path
packages = find_packages(where="../..", include=["spritely.core", "spritely.core.*"])

setup(
    packages=packages,
    package_dir={"": "../.."},
)
