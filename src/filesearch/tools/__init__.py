"""
Search tools for filesearch.

This module contains the request parser that turns command tokens into a
validated request, and the directory searcher that walks the tree.
"""
