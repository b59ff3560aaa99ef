"""
Shared domain types and descriptor record parsing.
"""
