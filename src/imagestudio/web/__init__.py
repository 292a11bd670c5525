"""Web surface for imagestudio."""

from imagestudio.web.app import create_app

__all__ = ["create_app"]
