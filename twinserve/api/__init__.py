from .routes import LiteralBody, build_route

__all__ = ["LiteralBody", "build_route"]
