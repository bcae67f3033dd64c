"""
HTTP layer for the image transform service
"""
