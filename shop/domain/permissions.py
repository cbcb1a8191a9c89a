# shop/domain/permissions.py
from shop.domain.enums import RoleName

# prefiks trasy -> role z dostepem; najdluzszy pasujacy prefiks wygrywa
ROUTE_PERMISSIONS = {
    "/admin": frozenset({RoleName.ADMIN}),
    "/managers": frozenset({RoleName.MANAGER, RoleName.ADMIN}),
}


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_allowed(role: RoleName | None, path: str) -> bool:
    """
    Sprawdza (rola, trasa) -> allow/deny, zanim ruszy logika kontrolera.
    Trasy bez wpisu sa publiczne.
    """
    matching = [p for p in ROUTE_PERMISSIONS if _matches(path, p)]
    if not matching:
        return True

    allowed = ROUTE_PERMISSIONS[max(matching, key=len)]
    return role is not None and RoleName(role) in allowed
