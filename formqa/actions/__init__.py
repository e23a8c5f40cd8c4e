from .action_handler import ActionHandler

__all__ = ["ActionHandler"]
