"""
Web API for PropGo listings.
"""
