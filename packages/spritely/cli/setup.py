from setuptools import find_packages, setup

# Find all packages - physical structure matches import path
packages = find_packages(where="../..", include=["spritely.cli", "spritely.cli.*"])

setup(
    packages=packages,
    package_dir={"": "../.."},
)
