"""Request and response objects exchanged with the transport client."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TypedDict

# Python field name -> BIR ``ParametryWyszukiwania`` element name
_SEARCH_FIELD_NAMES: dict[str, str] = {
    "regon": "Regon",
    "nip": "Nip",
    "krs": "Krs",
    "nipy": "Nipy",
    "krsy": "Krsy",
    "regony9zn": "Regony9zn",
    "regony14zn": "Regony14zn",
}


class SearchResponseCompanyData(TypedDict, total=False):
    """One ``dane`` row of a ``DaneSzukajPodmioty`` result."""

    Regon: str
    Nip: str
    StatusNip: str
    Nazwa: str
    Wojewodztwo: str
    Powiat: str
    Gmina: str
    Miejscowosc: str
    KodPocztowy: str
    Ulica: str
    NrNieruchomosci: str
    NrLokalu: str
    Typ: str
    SilosID: str
    DataZakonczeniaDzialalnosci: str
    MiejscowoscPoczty: str


@dataclass(frozen=True)
class SearchParameters:
    """Search criteria; exactly one field must be set."""

    regon: str | None = None
    nip: str | None = None
    krs: str | None = None
    nipy: str | None = None
    krsy: str | None = None
    regony9zn: str | None = None
    regony14zn: str | None = None

    def __post_init__(self) -> None:
        set_fields = [f.name for f in fields(self) if getattr(self, f.name)]
        if len(set_fields) != 1:
            raise ValueError(
                f"Exactly one search parameter must be set, got: {set_fields or 'none'}"
            )

    @property
    def name(self) -> str:
        return next(f.name for f in fields(self) if getattr(self, f.name))

    def as_soap(self) -> dict[str, str]:
        name = self.name
        return {_SEARCH_FIELD_NAMES[name]: str(getattr(self, name))}


@dataclass(frozen=True)
class Login:
    user_key: str


@dataclass(frozen=True)
class Logout:
    session_id: str


@dataclass(frozen=True)
class GetValue:
    parameter_name: str


@dataclass(frozen=True)
class SearchData:
    parameters: SearchParameters


@dataclass(frozen=True)
class GetFullReport:
    regon: str
    report_name: str


@dataclass(frozen=True)
class GetBulkReport:
    date: str
    report_name: str


@dataclass(frozen=True)
class LoginResponse:
    session_id: str


@dataclass(frozen=True)
class LogoutResponse:
    success: bool


@dataclass(frozen=True)
class GetValueResponse:
    value: str


@dataclass(frozen=True)
class SearchDataResponse:
    companies: list[SearchResponseCompanyData] = field(default_factory=list)


@dataclass(frozen=True)
class GetFullReportResponse:
    rows: list[dict[str, str]] = field(default_factory=list)


__all__ = [
    "GetBulkReport",
    "GetFullReport",
    "GetFullReportResponse",
    "GetValue",
    "GetValueResponse",
    "Login",
    "LoginResponse",
    "Logout",
    "LogoutResponse",
    "SearchData",
    "SearchDataResponse",
    "SearchParameters",
    "SearchResponseCompanyData",
]
