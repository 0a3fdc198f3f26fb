"""
Version of the Akismet client, sent in the User-Agent header.
"""

VERSION = "2.0.0"
