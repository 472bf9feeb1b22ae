from fridgechef.models.user import User

__all__ = ["User"]
