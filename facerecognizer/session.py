"""Registration session carrying the user being enrolled."""

from dataclasses import dataclass

from .errors import InvalidInput


@dataclass(frozen=True)
class RegistrationSession:
    """Who is being enrolled in the current registration flow.

    The user id is the identity key under which the embedding is stored;
    the name is only shown back to the user.
    """

    user_name: str
    user_id: str

    def __post_init__(self):
        name = (self.user_name or "").strip()
        user_id = (self.user_id or "").strip()
        if not name or not user_id:
            raise InvalidInput("Both user name and user id are required")
        object.__setattr__(self, "user_name", name)
        object.__setattr__(self, "user_id", user_id)

    @property
    def identity(self) -> str:
        return self.user_id
