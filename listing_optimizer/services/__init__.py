"""
Listing services: rules, compliance, keywords, scoring, generation and listing sources
"""
