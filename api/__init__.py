"""
HTTP surface shared by the domain routers
"""
