"""
Listing Optimizer
Marketplace listing generation and optimization for Amazon, Shopify, Etsy, eBay and Walmart
"""
__version__ = "1.0.0"
