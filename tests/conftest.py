from __future__ import annotations

from unittest import mock

import pytest

from gusapi import GusApi, GusApiClient
from gusapi.types import Login, LoginResponse, SearchResponseCompanyData

USER_KEY = "123absdefg123"
SESSION_ID = "12sessionid21"


def example_company_data() -> SearchResponseCompanyData:
    return SearchResponseCompanyData(
        Regon="610188201",
        Nip="7740001454",
        StatusNip="",
        Nazwa="POLSKI KONCERN NAFTOWY ORLEN SPÓŁKA AKCYJNA",
        Wojewodztwo="MAZOWIECKIE",
        Powiat="m. Płock",
        Gmina="M. Płock",
        Miejscowosc="Płock",
        KodPocztowy="09-411",
        Ulica="ul. Test-Krucza",
        NrNieruchomosci="7",
        NrLokalu="",
        Typ="P",
        SilosID="6",
        DataZakonczeniaDzialalnosci="",
        MiejscowoscPoczty="Płock",
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GUS_API_KEY", raising=False)
    monkeypatch.delenv("GUS_API_ENV", raising=False)


@pytest.fixture
def api_client() -> mock.Mock:
    return mock.Mock(spec=GusApiClient)


@pytest.fixture
def api(api_client: mock.Mock) -> GusApi:
    return GusApi.create_with_api_client(USER_KEY, api_client)


@pytest.fixture
def logged_api(api: GusApi, api_client: mock.Mock) -> GusApi:
    api_client.login.return_value = LoginResponse(SESSION_ID)
    assert api.login() is True
    api_client.login.assert_called_once_with(Login(USER_KEY))
    return api
