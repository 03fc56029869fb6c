"""
Configuration for gitlint.
"""
