"""
HTTP routers for thumbgallery.
"""

from . import gallery_routers, health_routers

__all__ = ["gallery_routers", "health_routers"]
