"""
API v1 package initialization
Importing modules explicitly so they can be imported from app.api.v1
"""

from app.api.v1 import products, stores
