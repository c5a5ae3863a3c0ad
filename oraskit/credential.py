"""Registry credentials built from user input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """Username and password, or tokens, used to authenticate to a registry."""

    username: str = ""
    password: str = ""
    refresh_token: str = ""
    access_token: str = ""


EMPTY_CREDENTIAL = Credential()


def credential(username: str, password: str) -> Credential:
    """Turn user input into a credential.

    Without a username the password is taken as a refresh token.
    """
    if not username:
        return Credential(refresh_token=password)
    return Credential(username=username, password=password)