from requests.auth import AuthBase


class HTTPBearerAuth(AuthBase):
    """
    Bearer token authentication (RFC 6750) for requests.  The token is
    configured as the password.
    """

    def __init__(self, password: str) -> None:
        self.password = password

    def __eq__(self, other: object) -> bool:
        return self.password == getattr(other, "password", None)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __call__(self, r):
        r.headers["Authorization"] = f"Bearer {self.password}"
        return r
