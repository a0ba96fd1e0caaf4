"""Transport client interface used by :class:`gusapi.GusApi`."""

from typing import Optional, Protocol

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
)


class GusApiClient(Protocol):
    """Protocol defining the BIR service operations."""

    def login(self, request: Login) -> LoginResponse:
        """Open a session; an empty session ID means the key was rejected."""

        ...

    def logout(self, request: Logout) -> LogoutResponse:
        ...

    def get_value(
        self, request: GetValue, session_id: Optional[str] = None
    ) -> GetValueResponse:
        ...

    def search_data(self, request: SearchData, session_id: str) -> SearchDataResponse:
        ...

    def get_full_report(
        self, request: GetFullReport, session_id: str
    ) -> GetFullReportResponse:
        ...

    def get_bulk_report(self, request: GetBulkReport, session_id: str) -> list[str]:
        """Return the REGON numbers listed by a bulk report."""

        ...
