from .gender import Gender

__all__ = ["Gender"]
