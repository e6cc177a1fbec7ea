"""
Terminal user interface
"""
