"""Transport module.

HTTP transport, session token holder and query value encoding.
"""
