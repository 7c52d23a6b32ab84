# filehound/core/__init__.py
"""
Search engine core: entries, filters, traversal and orchestration.
"""
