"""Code lists defined by the GUS BIR 1.1 service."""

from __future__ import annotations

from typing import Final

MAX_IDENTIFIERS: Final = 20


class ReportTypes:
    """Names accepted by ``DanePobierzPelnyRaport``."""

    REPORT_PERSON: Final = "BIR11OsFizycznaDaneOgolne"
    REPORT_PERSON_CEIDG: Final = "BIR11OsFizycznaDzialalnoscCeidg"
    REPORT_PERSON_AGRO: Final = "BIR11OsFizycznaDzialalnoscRolnicza"
    REPORT_PERSON_OTHER: Final = "BIR11OsFizycznaDzialalnoscPozostala"
    REPORT_PERSON_DELETED_BEFORE_20141108: Final = "BIR11OsFizycznaDzialalnoscSkreslonaDo20141108"
    REPORT_PERSON_ACTIVITY: Final = "BIR11OsFizycznaPkd"
    REPORT_PERSON_LOCALS: Final = "BIR11OsFizycznaListaJednLokalnych"
    REPORT_PERSON_LOCAL: Final = "BIR11JednLokalnaOsFizycznej"
    REPORT_PERSON_LOCAL_ACTIVITY: Final = "BIR11JednLokalnaOsFizycznejPkd"
    REPORT_PUBLIC_LAW: Final = "BIR11OsPrawna"
    REPORT_PUBLIC_LAW_ACTIVITY: Final = "BIR11OsPrawnaPkd"
    REPORT_PUBLIC_LAW_LOCALS: Final = "BIR11OsPrawnaListaJednLokalnych"
    REPORT_PUBLIC_LAW_LOCAL: Final = "BIR11JednLokalnaOsPrawnej"
    REPORT_PUBLIC_LAW_LOCAL_ACTIVITY: Final = "BIR11JednLokalnaOsPrawnejPkd"
    REPORT_CIVIL_PARTNERSHIP_PARTNERS: Final = "BIR11OsPrawnaSpCywilnaWspolnicy"
    REPORT_UNIT_TYPE_PUBLIC: Final = "BIR11TypPodmiotu"

    ALL: Final = frozenset(
        {
            REPORT_PERSON,
            REPORT_PERSON_CEIDG,
            REPORT_PERSON_AGRO,
            REPORT_PERSON_OTHER,
            REPORT_PERSON_DELETED_BEFORE_20141108,
            REPORT_PERSON_ACTIVITY,
            REPORT_PERSON_LOCALS,
            REPORT_PERSON_LOCAL,
            REPORT_PERSON_LOCAL_ACTIVITY,
            REPORT_PUBLIC_LAW,
            REPORT_PUBLIC_LAW_ACTIVITY,
            REPORT_PUBLIC_LAW_LOCALS,
            REPORT_PUBLIC_LAW_LOCAL,
            REPORT_PUBLIC_LAW_LOCAL_ACTIVITY,
            REPORT_CIVIL_PARTNERSHIP_PARTNERS,
            REPORT_UNIT_TYPE_PUBLIC,
        }
    )

    # Reports addressed by the 14-digit REGON of a local unit.
    REGON14: Final = frozenset(
        {
            REPORT_PERSON_LOCAL,
            REPORT_PERSON_LOCAL_ACTIVITY,
            REPORT_PUBLIC_LAW_LOCAL,
            REPORT_PUBLIC_LAW_LOCAL_ACTIVITY,
            REPORT_UNIT_TYPE_PUBLIC,
        }
    )


class BulkReportTypes:
    """Names accepted by ``DanePobierzRaportZbiorczy``."""

    REPORT_NEW_LEGAL_ENTITY_AND_NATURAL_PERSON: Final = (
        "BIR11NowePodmiotyPrawneOrazDzialalnosciOsFizycznych"
    )
    REPORT_UPDATED_LEGAL_ENTITY_AND_NATURAL_PERSON: Final = (
        "BIR11AktualizowanePodmiotyPrawneOrazDzialalnosciOsFizycznych"
    )
    REPORT_DELETED_LEGAL_ENTITY_AND_NATURAL_PERSON: Final = (
        "BIR11SkreslonePodmiotyPrawneOrazDzialalnosciOsFizycznych"
    )
    REPORT_NEW_LOCAL_UNITS: Final = "BIR11NoweJednostkiLokalne"
    REPORT_UPDATED_LOCAL_UNITS: Final = "BIR11AktualizowaneJednostkiLokalne"
    REPORT_DELETED_LOCAL_UNITS: Final = "BIR11SkresloneJednostkiLokalne"

    ALL: Final = frozenset(
        {
            REPORT_NEW_LEGAL_ENTITY_AND_NATURAL_PERSON,
            REPORT_UPDATED_LEGAL_ENTITY_AND_NATURAL_PERSON,
            REPORT_DELETED_LEGAL_ENTITY_AND_NATURAL_PERSON,
            REPORT_NEW_LOCAL_UNITS,
            REPORT_UPDATED_LOCAL_UNITS,
            REPORT_DELETED_LOCAL_UNITS,
        }
    )


class GetValueParameters:
    """Parameter names for the ``GetValue`` operation."""

    DATA_STATUS: Final = "StanDanych"
    MESSAGE_CODE: Final = "KomunikatKod"
    MESSAGE: Final = "KomunikatTresc"
    SESSION_STATUS: Final = "StatusSesji"
    SERVICE_STATUS: Final = "StatusUslugi"
    SERVICE_MESSAGE: Final = "KomunikatUslugi"


class MessageCodes:
    """Values of ``KomunikatKod`` reported after a failed call."""

    OK: Final = 0
    CAPTCHA_REQUIRED: Final = 1
    TOO_MANY_IDENTIFIERS: Final = 2
    NOT_FOUND: Final = 4
    ACCESS_DENIED: Final = 5
    SESSION_EXPIRED: Final = 7


__all__ = [
    "BulkReportTypes",
    "GetValueParameters",
    "MAX_IDENTIFIERS",
    "MessageCodes",
    "ReportTypes",
]
