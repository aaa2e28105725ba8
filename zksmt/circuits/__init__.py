"""
Relations consumed by proving backends.
"""
