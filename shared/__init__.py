"""
Commit models, sources, rules and reporting shared by gitlint services.
"""
