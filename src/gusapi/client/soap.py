"""SOAP transport for the BIR 1.1 service, built on zeep."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests
from lxml import etree
from zeep import Client, Settings
from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault
from zeep.transports import Transport

from ..environment import Environment, get_environment
from ..exceptions import InvalidServerResponseError, TransportError
from ..types import (
    GetBulkReport,
    GetFullReport,
    GetFullReportResponse,
    GetValue,
    GetValueResponse,
    Login,
    LoginResponse,
    Logout,
    LogoutResponse,
    SearchData,
    SearchDataResponse,
    SearchResponseCompanyData,
)
from ..utils.logging_setup import mask_secret, setup_logger
from .base import GusApiClient

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("client.soap")

_DEFAULT_TIMEOUT = (5.0, 30.0)
_SESSION_HEADER = "sid"


def parse_rows(payload: str | bytes | None) -> list[dict[str, str]]:
    """Decode a ``<root><dane>...</dane></root>`` result string into rows."""

    if payload is None:
        return []
    raw = payload.encode("utf-8") if isinstance(payload, str) else payload
    if not raw.strip():
        return []

    try:
        root = etree.fromstring(raw)
    except etree.XMLSyntaxError as exc:
        raise InvalidServerResponseError(f"Malformed XML in service response: {exc}") from exc

    rows: list[dict[str, str]] = []
    for element in root.xpath("//*[local-name()='dane']"):
        row: dict[str, str] = {}
        for child in element:
            if not isinstance(child.tag, str):
                continue
            row[etree.QName(child).localname] = (child.text or "").strip()
        rows.append(row)
    return rows


class SoapGusApiClient(GusApiClient):
    """Client that talks to the BIR service through zeep."""

    def __init__(
        self,
        environment: Environment | str | None = None,
        *,
        session: requests.Session | None = None,
        timeout: Sequence[float] | None = None,
    ) -> None:
        self.environment = get_environment(environment)
        self._session = session or requests.Session()
        self._client: Client | None = None

        if timeout is None:
            self._timeout = _DEFAULT_TIMEOUT
        elif len(timeout) == 1:
            self._timeout = (float(timeout[0]), _DEFAULT_TIMEOUT[1])
        else:
            connect, read = float(timeout[0]), float(timeout[1])
            self._timeout = (connect, read)

    def _get_client(self) -> Client:
        if self._client is None:
            LOGGER.debug("Loading WSDL %s", self.environment.wsdl)
            transport = Transport(
                session=self._session,
                timeout=self._timeout[0],
                operation_timeout=self._timeout[1],
            )
            self._client = Client(
                wsdl=self.environment.wsdl,
                transport=transport,
                settings=Settings(strict=False, xml_huge_tree=True),
            )
        return self._client

    def _set_session_header(self, session_id: str | None) -> None:
        if session_id:
            self._session.headers[_SESSION_HEADER] = session_id
        else:
            self._session.headers.pop(_SESSION_HEADER, None)

    def _call(self, operation: str, session_id: str | None, **kwargs: Any) -> Any:
        self._set_session_header(session_id)
        LOGGER.debug("Calling %s (sid=%s)", operation, mask_secret(session_id))
        try:
            service = self._get_client().service
            return getattr(service, operation)(**kwargs)
        except Fault as exc:
            LOGGER.error("SOAP fault in %s: %s", operation, exc.message)
            raise TransportError(f"{operation} failed: {exc.message}") from exc
        except ZeepError as exc:
            raise TransportError(f"{operation} failed: {exc}") from exc
        except requests.RequestException as exc:
            LOGGER.error("HTTP error in %s: %s", operation, exc)
            raise TransportError(f"{operation} failed: {exc}") from exc

    def login(self, request: Login) -> LoginResponse:
        result = self._call("Zaloguj", None, pKluczUzytkownika=request.user_key)
        return LoginResponse(session_id=str(result or ""))

    def logout(self, request: Logout) -> LogoutResponse:
        result = self._call(
            "Wyloguj", request.session_id, pIdentyfikatorSesji=request.session_id
        )
        self._set_session_header(None)
        return LogoutResponse(success=bool(result))

    def get_value(
        self, request: GetValue, session_id: str | None = None
    ) -> GetValueResponse:
        result = self._call("GetValue", session_id, pNazwaParametru=request.parameter_name)
        return GetValueResponse(value=str(result or ""))

    def search_data(self, request: SearchData, session_id: str) -> SearchDataResponse:
        result = self._call(
            "DaneSzukajPodmioty",
            session_id,
            pParametryWyszukiwania=request.parameters.as_soap(),
        )
        companies = [SearchResponseCompanyData(**row) for row in parse_rows(result)]
        return SearchDataResponse(companies=companies)

    def get_full_report(
        self, request: GetFullReport, session_id: str
    ) -> GetFullReportResponse:
        result = self._call(
            "DanePobierzPelnyRaport",
            session_id,
            pRegon=request.regon,
            pNazwaRaportu=request.report_name,
        )
        return GetFullReportResponse(rows=parse_rows(result))

    def get_bulk_report(self, request: GetBulkReport, session_id: str) -> list[str]:
        result = self._call(
            "DanePobierzRaportZbiorczy",
            session_id,
            pDataRaportu=request.date,
            pNazwaRaportu=request.report_name,
        )
        regons: list[str] = []
        for row in parse_rows(result):
            value = row.get("regon") or next(iter(row.values()), "")
            if value:
                regons.append(value)
        return regons


__all__ = ["SoapGusApiClient", "parse_rows"]
