"""HTTP API for mini2react."""

from mini2react.web.app import create_app

__all__ = ["create_app"]
