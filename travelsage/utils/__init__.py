"""Shared helpers: errors, identifiers, password hashing, rate limiting and LLM input/output screening"""
