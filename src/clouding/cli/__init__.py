"""
Command line interface for the Clouding client.
"""
