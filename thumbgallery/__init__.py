"""
thumbgallery - browsable image gallery with a self-maintaining thumbnail cache.
"""

__version__ = "0.1.0"
