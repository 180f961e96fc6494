"""Broker retailer API.

REST backend that maps HTTP requests onto stored procedures for the product
and violation catalogs and the order status listing.
"""

__version__ = "0.1.0"
