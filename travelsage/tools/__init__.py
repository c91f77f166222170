"""Keyword extraction used by the rule-based assistant"""
