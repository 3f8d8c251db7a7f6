"""Reconciliation core: canonicalize fields, normalize values, merge facts.

Layered flow:
1) canonicalize raw field labels and assign categories
2) normalize raw values per category
3) merge equivalent facts in one ordered pass and record conflicts
4) sort merged facts for presentation
"""
