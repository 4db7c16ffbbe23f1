"""Public Account View — the only shape an account takes outside the service.

Invariants:
    - public_view never includes the password hash
    - Output is JSON-serializable (created_at as ISO-8601 string)

Design Decisions:
    - Allow-list of attributes over deleting "password" from a dict: a column
      added later stays private until someone lists it here
"""

from account_api.core.repository_protocols import AccountLike


PUBLIC_FIELDS: tuple[str, ...] = (
    "id", "email", "name", "bio", "age", "phone", "created_at",
)


def public_view(account: AccountLike) -> dict:
    """Project an account onto its public fields."""
    view = {name: getattr(account, name) for name in PUBLIC_FIELDS}
    if view["created_at"] is not None:
        view["created_at"] = view["created_at"].isoformat()
    return view
