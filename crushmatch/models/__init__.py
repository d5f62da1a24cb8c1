from crushmatch.models.user import User
from crushmatch.models.interest import Interest

__all__ = ["User", "Interest"]
