"""
gitlint services.
"""
