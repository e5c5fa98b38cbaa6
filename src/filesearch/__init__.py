"""
filesearch - Core Package

A command-line utility that recursively searches a directory tree for files
whose name contains a given substring, with optional depth and result limits.
"""

__version__ = "0.1.0"
__author__ = "filesearch Team"
