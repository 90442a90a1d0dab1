"""CLI module.

Click commands for the connect-xmlapi executable.
"""
