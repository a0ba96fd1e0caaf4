"""Typed view of a single search hit."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from .json_serializable import JsonSerializable
from .types import SearchResponseCompanyData

TYPE_JURIDICAL_PERSON: Final = "p"
TYPE_NATURAL_PERSON: Final = "f"
TYPE_LOCAL_ENTITY_JURIDICAL_PERSON: Final = "lp"
TYPE_LOCAL_ENTITY_NATURAL_PERSON: Final = "lf"

_REGON14_LENGTH: Final = 14


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


class SearchReport(JsonSerializable):
    """Entity returned by ``DaneSzukajPodmioty``.

    Values are kept exactly as the service sent them; missing fields are
    represented by an empty string.
    """

    def __init__(self, data: SearchResponseCompanyData | Mapping[str, Any]) -> None:
        self.regon = _text(data, "Regon")
        self.regon14 = self.regon.ljust(_REGON14_LENGTH, "0") if self.regon else ""
        self.nip = _text(data, "Nip")
        self.nip_status = _text(data, "StatusNip")
        self.name = _text(data, "Nazwa")
        self.province = _text(data, "Wojewodztwo")
        self.district = _text(data, "Powiat")
        self.community = _text(data, "Gmina")
        self.city = _text(data, "Miejscowosc")
        self.zip_code = _text(data, "KodPocztowy")
        self.street = _text(data, "Ulica")
        self.property_number = _text(data, "NrNieruchomosci")
        self.apartment_number = _text(data, "NrLokalu")
        self.type = _text(data, "Typ").lower()
        self.silo_id = _text(data, "SilosID")
        self.activity_end_date = _text(data, "DataZakonczeniaDzialalnosci")
        self.post_city = _text(data, "MiejscowoscPoczty")

    def __repr__(self) -> str:
        return f"SearchReport(regon={self.regon!r}, nip={self.nip!r}, name={self.name!r})"

    def json_serialize(self) -> dict[str, str]:
        return {
            "regon": self.regon,
            "regon14": self.regon14,
            "nip": self.nip,
            "nip_status": self.nip_status,
            "name": self.name,
            "province": self.province,
            "district": self.district,
            "community": self.community,
            "city": self.city,
            "zip_code": self.zip_code,
            "street": self.street,
            "property_number": self.property_number,
            "apartment_number": self.apartment_number,
            "type": self.type,
            "silo_id": self.silo_id,
            "activity_end_date": self.activity_end_date,
            "post_city": self.post_city,
        }


__all__ = [
    "SearchReport",
    "TYPE_JURIDICAL_PERSON",
    "TYPE_LOCAL_ENTITY_JURIDICAL_PERSON",
    "TYPE_LOCAL_ENTITY_NATURAL_PERSON",
    "TYPE_NATURAL_PERSON",
]
