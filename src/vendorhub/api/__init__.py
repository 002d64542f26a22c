from .app import create_app, get_controller, require_admin

__all__ = ["create_app", "get_controller", "require_admin"]
