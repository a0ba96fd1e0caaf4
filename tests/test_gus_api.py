from __future__ import annotations

from datetime import date, datetime
from unittest import mock

import pytest

from conftest import SESSION_ID, USER_KEY, example_company_data
from gusapi import (
    BulkReportTypes,
    GusApiClient,
    GusApi,
    InvalidReportTypeError,
    InvalidServerResponseError,
    InvalidSessionError,
    InvalidUserKeyError,
    NotFoundError,
    ReportTypes,
    SearchReport,
)
from gusapi.types import (
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
    SearchParameters,
)


def _expect_get_value(api_client: mock.Mock, value: str) -> None:
    api_client.get_value.return_value = GetValueResponse(value)


def test_login(logged_api: GusApi) -> None:
    assert logged_api.get_user_key() == USER_KEY
    assert logged_api.get_session_id() == SESSION_ID


def test_invalid_login(api: GusApi, api_client: mock.Mock) -> None:
    api_client.login.return_value = LoginResponse("")
    api.set_user_key("invalid-key")

    with pytest.raises(InvalidUserKeyError):
        api.login()

    api_client.login.assert_called_once_with(Login("invalid-key"))
    assert api.get_session_id() == ""


def test_missing_user_key_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(InvalidUserKeyError):
        GusApi(env="prod", client=mock.Mock())


def test_user_key_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GUS_API_KEY", "env-key")
    api = GusApi(client=mock.Mock())
    assert api.get_user_key() == "env-key"


def test_development_environment_has_default_key() -> None:
    api = GusApi(env="dev", client=mock.Mock())
    assert api.get_user_key() == "abcde12345abcde12345"


def test_logout(api: GusApi, api_client: mock.Mock) -> None:
    api_client.logout.return_value = LogoutResponse(True)
    api.set_session_id(SESSION_ID)

    assert api.logout() is True

    api_client.logout.assert_called_once_with(Logout(SESSION_ID))
    assert api.get_session_id() == ""


def test_logout_without_session_raises(api: GusApi, api_client: mock.Mock) -> None:
    with pytest.raises(InvalidSessionError):
        api.logout()
    api_client.logout.assert_not_called()


def test_get_session_status(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "1")
    api.set_session_id(SESSION_ID)

    assert api.get_session_status() == 1
    assert api.is_logged() is True

    assert api_client.get_value.call_count == 2
    api_client.get_value.assert_called_with(GetValue("StatusSesji"), SESSION_ID)


def test_empty_status_means_not_logged(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "")
    assert api.is_logged() is False


@pytest.mark.parametrize(
    "method, parameter, value",
    [
        ("get_by_krs", "krs", "28860"),
        ("get_by_krses", "krsy", ["28860"]),
        ("get_by_nip", "nip", "7740001454"),
        ("get_by_nips", "nipy", ["7740001454"]),
        ("get_by_regon", "regon", "610188201"),
        ("get_by_regons9", "regony9zn", ["610188201"]),
        ("get_by_regons14", "regony14zn", ["61018820100000"]),
    ],
)
def test_search_by_parameter(
    logged_api: GusApi, api_client: mock.Mock, method: str, parameter: str, value
) -> None:
    api_client.search_data.return_value = SearchDataResponse([example_company_data()])
    joined = ",".join(value) if isinstance(value, list) else value

    result = getattr(logged_api, method)(value)

    api_client.search_data.assert_called_once_with(
        SearchData(SearchParameters(**{parameter: joined})), SESSION_ID
    )
    assert len(result) == 1
    assert isinstance(result[0], SearchReport)
    assert result[0].regon == "610188201"
    assert result[0].nip == "7740001454"
    assert result[0].name == "POLSKI KONCERN NAFTOWY ORLEN SPÓŁKA AKCYJNA"
    assert result[0].type == "p"


def test_batch_search_joins_identifiers(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.search_data.return_value = SearchDataResponse([example_company_data()])

    logged_api.get_by_nips(["774-000-14-54", "5270103391"])

    api_client.search_data.assert_called_once_with(
        SearchData(SearchParameters(nipy="7740001454,5270103391")), SESSION_ID
    )


def test_too_many_nips_raises_an_exception(api: GusApi, api_client: mock.Mock) -> None:
    with pytest.raises(ValueError, match="Too many identifiers"):
        api.get_by_nips(["7740001454"] * 21)
    api_client.search_data.assert_not_called()


@pytest.mark.parametrize(
    "method, value",
    [
        ("get_by_nip", "77400014"),
        ("get_by_regon", "6101882011"),
        ("get_by_krs", "12345678901"),
        ("get_by_regons9", ["61018820100000"]),
        ("get_by_nips", ["ABC0001454"]),
    ],
)
def test_malformed_identifier_raises(
    logged_api: GusApi, api_client: mock.Mock, method: str, value
) -> None:
    with pytest.raises(ValueError):
        getattr(logged_api, method)(value)
    api_client.search_data.assert_not_called()


def test_search_requires_session(api: GusApi, api_client: mock.Mock) -> None:
    with pytest.raises(InvalidSessionError):
        api.get_by_nip("7740001454")
    api_client.search_data.assert_not_called()


def test_empty_search_raises_not_found(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.search_data.return_value = SearchDataResponse([])
    api_client.get_value.side_effect = [
        GetValueResponse("4"),
        GetValueResponse("Nie znaleziono podmiotów."),
    ]

    with pytest.raises(NotFoundError) as excinfo:
        logged_api.get_by_nip("7740001454")

    assert excinfo.value.message_code == 4
    assert excinfo.value.message == "Nie znaleziono podmiotów."
    assert api_client.get_value.call_args_list == [
        mock.call(GetValue("KomunikatKod"), SESSION_ID),
        mock.call(GetValue("KomunikatTresc"), SESSION_ID),
    ]


def test_expired_session_during_search(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.search_data.return_value = SearchDataResponse([])
    api_client.get_value.side_effect = [GetValueResponse("7"), GetValueResponse("Brak sesji.")]

    with pytest.raises(InvalidSessionError):
        logged_api.get_by_regon("610188201")
    assert logged_api.get_session_id() == ""


def test_get_full_report_with_invalid_report_type(api: GusApi, api_client: mock.Mock) -> None:
    report = SearchReport(example_company_data())

    with pytest.raises(InvalidReportTypeError):
        api.get_full_report(report, "invalid-report-name")
    api_client.get_full_report.assert_not_called()


def test_get_full_report_with_regon14_report_type(
    logged_api: GusApi, api_client: mock.Mock
) -> None:
    api_client.get_full_report.return_value = GetFullReportResponse([{"praw_regon14": "x"}])
    report = SearchReport(example_company_data())

    logged_api.get_full_report(report, ReportTypes.REPORT_UNIT_TYPE_PUBLIC)

    api_client.get_full_report.assert_called_once_with(
        GetFullReport("61018820100000", "BIR11TypPodmiotu"), SESSION_ID
    )


def test_get_full_report(logged_api: GusApi, api_client: mock.Mock) -> None:
    rows = [
        {
            "fiz_regon9": "666666666",
            "fiz_nazwa": "NIEPUBLICZNY ZAKŁAD OPIEKI ZDROWOTNEJ xxxxxxxxxxxxx",
            "fiz_dataPowstania": "1993-03-20",
            "fiz_adSiedzWojewodztwo_Nazwa": "WIELKOPOLSKIE",
            "fizP_RodzajRejestru_Symbol": "099",
        }
    ]
    api_client.get_full_report.return_value = GetFullReportResponse(rows)
    report = SearchReport(example_company_data())

    full_report = logged_api.get_full_report(report, ReportTypes.REPORT_PUBLIC_LAW)

    api_client.get_full_report.assert_called_once_with(
        GetFullReport("610188201", "BIR11OsPrawna"), SESSION_ID
    )
    assert full_report == rows


def test_get_full_report_accepts_regon_string(
    logged_api: GusApi, api_client: mock.Mock
) -> None:
    api_client.get_full_report.return_value = GetFullReportResponse([{"praw_regon9": "1"}])

    logged_api.get_full_report("610188201", ReportTypes.REPORT_PUBLIC_LAW_ACTIVITY)

    api_client.get_full_report.assert_called_once_with(
        GetFullReport("610188201", "BIR11OsPrawnaPkd"), SESSION_ID
    )


def test_get_full_report_error_row(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.get_full_report.return_value = GetFullReportResponse(
        [{"ErrorCode": "4", "ErrorMessageEn": "No data found for the specified search criteria."}]
    )

    with pytest.raises(NotFoundError):
        logged_api.get_full_report("610188201", ReportTypes.REPORT_PUBLIC_LAW)


def test_get_bulk_report(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.get_bulk_report.return_value = ["000111234", "111999023"]

    actual = logged_api.get_bulk_report(date(2019, 1, 1), BulkReportTypes.REPORT_NEW_LOCAL_UNITS)

    api_client.get_bulk_report.assert_called_once_with(
        GetBulkReport("2019-01-01", "BIR11NoweJednostkiLokalne"), SESSION_ID
    )
    assert actual == ["000111234", "111999023"]


def test_get_bulk_report_accepts_datetime(logged_api: GusApi, api_client: mock.Mock) -> None:
    api_client.get_bulk_report.return_value = []

    logged_api.get_bulk_report(
        datetime(2019, 1, 1, 12, 30), BulkReportTypes.REPORT_DELETED_LOCAL_UNITS
    )

    request = api_client.get_bulk_report.call_args.args[0]
    assert request.date == "2019-01-01"


def test_get_bulk_report_with_invalid_report_name(api: GusApi, api_client: mock.Mock) -> None:
    with pytest.raises(InvalidReportTypeError):
        api.get_bulk_report(date(2019, 1, 1), "invalid-report-name")
    api_client.get_bulk_report.assert_not_called()


def test_get_result_search_message(api: GusApi, api_client: mock.Mock) -> None:
    api_client.get_value.side_effect = [
        GetValueResponse("1"),
        GetValueResponse("1"),
        GetValueResponse("Server Test Error"),
    ]
    api.set_session_id(SESSION_ID)

    message = api.get_result_search_message()

    assert message == "StatusSesji:1\nKomunikatKod:1\nKomunikatTresc:Server Test Error\n"
    assert api_client.get_value.call_args_list == [
        mock.call(GetValue("StatusSesji"), SESSION_ID),
        mock.call(GetValue("KomunikatKod"), SESSION_ID),
        mock.call(GetValue("KomunikatTresc"), SESSION_ID),
    ]


def test_get_data_status(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "31-12-2014")

    assert api.data_status() == date(2014, 12, 31)
    api_client.get_value.assert_called_once_with(GetValue("StanDanych"), None)


def test_get_data_status_with_invalid_date_format(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "random-format")

    with pytest.raises(InvalidServerResponseError):
        api.data_status()


def test_get_service_status(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "1")
    assert api.service_status() == 1
    api_client.get_value.assert_called_once_with(GetValue("StatusUslugi"), None)


def test_non_numeric_status_raises(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "maybe")
    with pytest.raises(InvalidServerResponseError):
        api.service_status()


def test_get_service_message(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "Example service message")
    assert api.service_message() == "Example service message"
    api_client.get_value.assert_called_once_with(GetValue("KomunikatUslugi"), None)


def test_get_message(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "Example message")
    assert api.get_message() == "Example message"
    api_client.get_value.assert_called_once_with(GetValue("KomunikatTresc"), None)


def test_get_message_code(api: GusApi, api_client: mock.Mock) -> None:
    _expect_get_value(api_client, "1")
    assert api.get_message_code() == 1
    api_client.get_value.assert_called_once_with(GetValue("KomunikatKod"), None)


def test_invalid_login_message_masks_user_key(api: GusApi, api_client: mock.Mock) -> None:
    api_client.login.return_value = LoginResponse("")
    api.set_user_key("supersecretkey1234567")

    with pytest.raises(InvalidUserKeyError) as excinfo:
        api.login()

    assert "supersecretkey1234567" not in str(excinfo.value)
    assert "supe***" in str(excinfo.value)
    assert excinfo.value.user_key == "supersecretkey1234567"


def test_get_full_report_pads_regon_string_for_local_unit_reports(
    logged_api: GusApi, api_client: mock.Mock
) -> None:
    api_client.get_full_report.return_value = GetFullReportResponse([{"lokpraw_regon14": "1"}])

    logged_api.get_full_report("610188201", ReportTypes.REPORT_PUBLIC_LAW_LOCAL)

    api_client.get_full_report.assert_called_once_with(
        GetFullReport("61018820100000", "BIR11JednLokalnaOsPrawnej"), SESSION_ID
    )


def test_get_full_report_rejects_malformed_regon_string(
    logged_api: GusApi, api_client: mock.Mock
) -> None:
    with pytest.raises(ValueError):
        logged_api.get_full_report("61018", ReportTypes.REPORT_PUBLIC_LAW)
    api_client.get_full_report.assert_not_called()


def test_injected_client_ignores_environment_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GUS_API_ENV", "staging")
    client = mock.Mock(spec=GusApiClient)

    api = GusApi.create_with_api_client(USER_KEY, client)

    assert api.get_user_key() == USER_KEY


def test_unknown_environment_still_rejected_without_client(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GUS_API_ENV", "staging")
    with pytest.raises(ValueError):
        GusApi(USER_KEY)
