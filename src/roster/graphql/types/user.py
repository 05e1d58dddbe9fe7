"""
User GraphQL type definitions
"""

import strawberry

from ...services.views import AccountView


@strawberry.type
class User:
    """Registered account; never exposes the password hash."""

    id: strawberry.ID
    username: str
    email: str
    created_at: str = strawberry.field(name="createdAt")
    updated_at: str = strawberry.field(name="updatedAt")

    @classmethod
    def from_view(cls, view: AccountView) -> "User":
        return cls(
            id=strawberry.ID(view["id"]),
            username=view["username"],
            email=view["email"],
            created_at=view["createdAt"],
            updated_at=view["updatedAt"],
        )


@strawberry.type
class AuthPayload:
    """Token issued at signup or login, with the account it was issued for."""

    token: str
    user: User
