"""
fileman - Core Package

A small file-management utility that lists, searches, copies, moves and
deletes files and directory trees on the local filesystem.
"""

__version__ = "0.1.0"
__author__ = "fileman Team"
