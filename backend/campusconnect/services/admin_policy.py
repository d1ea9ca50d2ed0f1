from collections.abc import Iterable


def is_admin_email(email: str | None, allow_list: Iterable[str]) -> bool:
    """Return True when ``email`` belongs to the admin allow-list.

    Both sides are compared stripped and lower-cased; a missing email is never an admin.
    """
    if not email:
        return False
    normalized = email.strip().lower()
    if not normalized:
        return False
    return normalized in {allowed.strip().lower() for allowed in allow_list}
