"""High level facade over the GUS BIR 1.1 service."""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Final

from .client.base import GusApiClient
from .client.soap import SoapGusApiClient
from .constants import (
    MAX_IDENTIFIERS,
    BulkReportTypes,
    GetValueParameters,
    MessageCodes,
    ReportTypes,
)
from .environment import USER_KEY_VARIABLE, get_environment
from .exceptions import (
    InvalidReportTypeError,
    InvalidServerResponseError,
    InvalidSessionError,
    InvalidUserKeyError,
    NotFoundError,
)
from .search_report import SearchReport
from .types import (
    GetBulkReport,
    GetFullReport,
    GetValue,
    Login,
    Logout,
    SearchData,
    SearchParameters,
)
from .utils.logging_setup import mask_secret, setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("gus_api")

_DATA_STATUS_FORMAT: Final = "%d-%m-%Y"
_IDENTIFIER_NOISE = re.compile(r"[\s-]+")


def _normalise_identifier(value: str) -> str:
    return _IDENTIFIER_NOISE.sub("", str(value))


def _validate_identifier(kind: str, value: str, lengths: Sequence[int]) -> str:
    identifier = _normalise_identifier(value)
    if not identifier.isdigit() or len(identifier) not in lengths:
        expected = " or ".join(str(length) for length in lengths)
        raise ValueError(f"Invalid {kind} '{value}': expected {expected} digits")
    return identifier


def _validate_krs(value: str) -> str:
    identifier = _normalise_identifier(value)
    if not identifier.isdigit() or len(identifier) > 10:
        raise ValueError(f"Invalid KRS '{value}': expected up to 10 digits")
    return identifier


class GusApi:
    """Session-aware client for the BIR service.

    The instance owns the session state: the user key and the session ID
    issued by :meth:`login`. Every call is synchronous; errors reported by the
    service are raised as :mod:`gusapi.exceptions` types and never retried.
    """

    def __init__(
        self,
        user_key: str | None = None,
        env: str | None = None,
        *,
        client: GusApiClient | None = None,
        timeout: Sequence[float] | None = None,
    ) -> None:
        self._user_key = user_key or os.getenv(USER_KEY_VARIABLE) or ""
        # An injected client owns its endpoint.
        environment = None
        if client is None or not self._user_key:
            environment = get_environment(env)
            self._user_key = self._user_key or environment.default_user_key or ""
        if not self._user_key:
            raise InvalidUserKeyError(
                f"{USER_KEY_VARIABLE} must be set (environment variable or parameter)."
            )
        self._session_id = ""

        if client is None:
            client = SoapGusApiClient(environment, timeout=timeout)
        self._client = client

    @classmethod
    def create_with_api_client(cls, user_key: str, client: GusApiClient) -> GusApi:
        return cls(user_key, client=client)

    def get_user_key(self) -> str:
        return self._user_key

    def set_user_key(self, user_key: str) -> None:
        self._user_key = user_key

    def get_session_id(self) -> str:
        return self._session_id

    def set_session_id(self, session_id: str) -> None:
        self._session_id = session_id

    def login(self) -> bool:
        LOGGER.info("Logging in with user key %s", mask_secret(self._user_key))
        response = self._client.login(Login(self._user_key))
        if not response.session_id:
            raise InvalidUserKeyError(
                f"User key '{mask_secret(self._user_key)}' is invalid",
                user_key=self._user_key,
            )
        self._session_id = response.session_id
        LOGGER.debug("Session %s opened", mask_secret(self._session_id))
        return True

    def logout(self) -> bool:
        self._verify_session()
        response = self._client.logout(Logout(self._session_id))
        if response.success:
            LOGGER.debug("Session %s closed", mask_secret(self._session_id))
            self._session_id = ""
        return response.success

    def is_logged(self) -> bool:
        return bool(self.get_session_status())

    def get_session_status(self) -> int:
        return self._get_int_value(GetValueParameters.SESSION_STATUS)

    def service_status(self) -> int:
        return self._get_int_value(GetValueParameters.SERVICE_STATUS)

    def service_message(self) -> str:
        return self._get_value(GetValueParameters.SERVICE_MESSAGE)

    def get_message_code(self) -> int:
        return self._get_int_value(GetValueParameters.MESSAGE_CODE)

    def get_message(self) -> str:
        return self._get_value(GetValueParameters.MESSAGE)

    def data_status(self) -> date:
        """Return the date the registry data was last refreshed."""

        value = self._get_value(GetValueParameters.DATA_STATUS)
        try:
            return datetime.strptime(value.strip(), _DATA_STATUS_FORMAT).date()
        except ValueError as exc:
            raise InvalidServerResponseError(
                f"Invalid response from server, unexpected date '{value}'"
            ) from exc

    def get_result_search_message(self) -> str:
        return (
            f"{GetValueParameters.SESSION_STATUS}:{self.get_session_status()}\n"
            f"{GetValueParameters.MESSAGE_CODE}:{self.get_message_code()}\n"
            f"{GetValueParameters.MESSAGE}:{self.get_message()}\n"
        )

    def get_by_nip(self, nip: str) -> list[SearchReport]:
        return self.search(SearchParameters(nip=_validate_identifier("NIP", nip, (10,))))

    def get_by_regon(self, regon: str) -> list[SearchReport]:
        return self.search(
            SearchParameters(regon=_validate_identifier("REGON", regon, (9, 14)))
        )

    def get_by_krs(self, krs: str) -> list[SearchReport]:
        return self.search(SearchParameters(krs=_validate_krs(krs)))

    def get_by_nips(self, nips: Sequence[str]) -> list[SearchReport]:
        self._check_identifiers_count(nips)
        joined = ",".join(_validate_identifier("NIP", nip, (10,)) for nip in nips)
        return self.search(SearchParameters(nipy=joined))

    def get_by_krses(self, krses: Sequence[str]) -> list[SearchReport]:
        self._check_identifiers_count(krses)
        joined = ",".join(_validate_krs(krs) for krs in krses)
        return self.search(SearchParameters(krsy=joined))

    def get_by_regons9(self, regons: Sequence[str]) -> list[SearchReport]:
        self._check_identifiers_count(regons)
        joined = ",".join(_validate_identifier("REGON", regon, (9,)) for regon in regons)
        return self.search(SearchParameters(regony9zn=joined))

    def get_by_regons14(self, regons: Sequence[str]) -> list[SearchReport]:
        self._check_identifiers_count(regons)
        joined = ",".join(_validate_identifier("REGON", regon, (14,)) for regon in regons)
        return self.search(SearchParameters(regony14zn=joined))

    def search(self, parameters: SearchParameters) -> list[SearchReport]:
        self._verify_session()
        LOGGER.debug("Searching by %s", parameters.name)
        response = self._client.search_data(SearchData(parameters), self._session_id)
        if not response.companies:
            self._raise_not_found()
        return [SearchReport(company) for company in response.companies]

    def get_full_report(
        self, report: SearchReport | str, report_type: str
    ) -> list[dict[str, str]]:
        if report_type not in ReportTypes.ALL:
            raise InvalidReportTypeError(report_type, ReportTypes.ALL)

        if isinstance(report, SearchReport):
            regon = report.regon14 if report_type in ReportTypes.REGON14 else report.regon
        else:
            regon = _validate_identifier("REGON", report, (9, 14))
            if report_type in ReportTypes.REGON14:
                regon = regon.ljust(14, "0")
        self._verify_session()

        LOGGER.debug("Requesting %s for REGON %s", report_type, regon)
        response = self._client.get_full_report(
            GetFullReport(regon, report_type), self._session_id
        )
        rows = response.rows
        if rows and "ErrorCode" in rows[0]:
            error = rows[0]
            message = error.get("ErrorMessageEn") or error.get("ErrorMessagePl") or ""
            if error["ErrorCode"] == str(MessageCodes.NOT_FOUND):
                raise NotFoundError(message, message_code=MessageCodes.NOT_FOUND)
            raise InvalidServerResponseError(
                f"Report {report_type} failed with code {error['ErrorCode']}: {message}"
            )
        return rows

    def get_bulk_report(self, report_date: date, report_type: str) -> list[str]:
        if report_type not in BulkReportTypes.ALL:
            raise InvalidReportTypeError(report_type, BulkReportTypes.ALL)
        self._verify_session()

        day = report_date.date() if isinstance(report_date, datetime) else report_date
        return self._client.get_bulk_report(
            GetBulkReport(day.isoformat(), report_type), self._session_id
        )

    def _verify_session(self) -> None:
        if not self._session_id:
            raise InvalidSessionError("No active session, call login() first")

    @staticmethod
    def _check_identifiers_count(identifiers: Sequence[str]) -> None:
        if len(identifiers) > MAX_IDENTIFIERS:
            raise ValueError(
                f"Too many identifiers. Maximum allowed is {MAX_IDENTIFIERS}."
            )

    def _raise_not_found(self) -> None:
        code = self.get_message_code()
        message = self.get_message()
        if code == MessageCodes.SESSION_EXPIRED:
            self._session_id = ""
            raise InvalidSessionError(message or "Session expired")
        raise NotFoundError(message or "No data found", message_code=code)

    def _get_value(self, parameter: str) -> str:
        response = self._client.get_value(GetValue(parameter), self._session_id or None)
        return response.value

    def _get_int_value(self, parameter: str) -> int:
        value = self._get_value(parameter).strip()
        if not value:
            return 0
        try:
            return int(value)
        except ValueError as exc:
            raise InvalidServerResponseError(
                f"Invalid response from server, {parameter} is not a number: '{value}'"
            ) from exc


__all__ = ["GusApi"]
