"""
Merchant catalog harvesting: price-windowed search crawling and
per-product detail enrichment.
"""
