from .user_directory import UserDirectoryService, UserPage

__all__ = ["UserDirectoryService", "UserPage"]
