"""Service endpoints for the production and test BIR installations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

ENV_VARIABLE: Final = "GUS_API_ENV"
USER_KEY_VARIABLE: Final = "GUS_API_KEY"


@dataclass(frozen=True)
class Environment:
    name: str
    wsdl: str
    location: str
    default_user_key: str | None = None


PRODUCTION: Final = Environment(
    name="prod",
    wsdl="https://wyszukiwarkaregon.stat.gov.pl/wsBIR/wsdl/UslugaBIRzewnPubl-ver11-prod.wsdl",
    location="https://wyszukiwarkaregon.stat.gov.pl/wsBIR/UslugaBIRzewnPubl.svc",
)

DEVELOPMENT: Final = Environment(
    name="dev",
    wsdl="https://wyszukiwarkaregontest.stat.gov.pl/wsBIR/wsdl/UslugaBIRzewnPubl-ver11-test.wsdl",
    location="https://wyszukiwarkaregontest.stat.gov.pl/wsBIR/UslugaBIRzewnPubl.svc",
    # Public key published by GUS for the test installation.
    default_user_key="abcde12345abcde12345",
)

_ALIASES: Final = {
    "prod": PRODUCTION,
    "production": PRODUCTION,
    "dev": DEVELOPMENT,
    "test": DEVELOPMENT,
    "development": DEVELOPMENT,
}


def get_environment(name: str | Environment | None = None) -> Environment:
    """Resolve *name* (or ``GUS_API_ENV``) to an :class:`Environment`."""

    if isinstance(name, Environment):
        return name
    if name is None:
        name = os.getenv(ENV_VARIABLE) or PRODUCTION.name

    key = name.strip().lower()
    try:
        return _ALIASES[key]
    except KeyError as exc:
        raise ValueError(
            f"Unknown environment '{name}', use one of: {', '.join(sorted(_ALIASES))}"
        ) from exc


__all__ = [
    "DEVELOPMENT",
    "ENV_VARIABLE",
    "Environment",
    "PRODUCTION",
    "USER_KEY_VARIABLE",
    "get_environment",
]
