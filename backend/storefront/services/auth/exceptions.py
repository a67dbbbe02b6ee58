"""Authentication exceptions."""

from storefront.services.exceptions import ServiceError


class InvalidCredentials(ServiceError):
    """Unknown email or wrong password. The two cases are deliberately indistinguishable."""

    pass
