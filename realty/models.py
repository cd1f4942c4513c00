"""Identity resolved from a bearer token."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    id: str
    email: str | None = None

    @classmethod
    def from_user(cls, user) -> "Identity":
        """Build from a supabase auth user object."""
        return cls(id=str(user.id), email=getattr(user, "email", None))

    def owns(self, owner_id) -> bool:
        return owner_id is not None and str(owner_id) == self.id
