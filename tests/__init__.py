"""Test suite for spritely.

Test Structure:
- unit/<area>/: Unit tests, one directory per package under spritely.core
- unit/cli/: Command-line tests run in temporary project directories
"""
