"""
Catalog crawling and detail enrichment.
"""
