"""API module.

Status parsing, field encoding, XML marshalling and the client facade.
"""
