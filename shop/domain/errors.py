# shop/domain/errors.py


class ShopError(Exception):
    """Bazowy wyjatek domeny sklepu."""


class ValidationError(ShopError, ValueError):
    """Puste/niepoprawne pole wymagane, ilosc < 1 itp."""


class TransitionError(ValidationError):
    """Niedozwolona zmiana statusu zamowienia."""


class NotFoundError(ShopError, LookupError):
    """Brak obiektu o podanym id / kluczu."""


class NotificationFailure(ShopError):
    """Powiadomienie o zamowieniu nie zostalo wyslane."""
