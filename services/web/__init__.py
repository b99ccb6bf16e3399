"""
electricityMap web service
Delivery layer for the public web app: static bundles, the localized shell, redirects.
"""
