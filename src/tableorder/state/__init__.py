"""State layer.

This package is the single owner of the menu cache, the derived cart and
the session fields mirrored from the socket client.
"""
