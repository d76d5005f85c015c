"""
Storefront backend: catalog, cart, checkout and integrations for the multi-vendor marketplace
"""
