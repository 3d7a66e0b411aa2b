"""
Fortune frontend package.

A small FastAPI service that proxies browser requests to the fortune
backend, renders the fortune list as HTML and serves static assets.
"""
