from .main import Notifier

__all__ = ["Notifier"]
