"""Command line entry point for querying the GUS BIR service."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from datetime import date
from pathlib import Path

import yaml
from dotenv import load_dotenv

from gusapi import excel_io
from gusapi.constants import ReportTypes
from gusapi.exceptions import GusApiError, InvalidUserKeyError, NotFoundError
from gusapi.gus_api import GusApi
from gusapi.json_serializable import dumps
from gusapi.search_report import SearchReport

logger = logging.getLogger(__name__)

DEFAULT_MAPPING: dict[str, str] = {
    "name": "D",
    "regon": "E",
    "nip": "F",
    "street": "G",
    "property_number": "H",
    "apartment_number": "I",
    "zip_code": "J",
    "city": "K",
    "province": "L",
    "notes": "M",
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gusapi", description="GUS BIR 1.1 registry client")
    parser.add_argument(
        "--env", default=None, help="Environment: prod or dev (default: GUS_API_ENV or prod)"
    )
    parser.add_argument("--key", default=None, help="User key (default: GUS_API_KEY)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search entities by identifier")
    identifier = search.add_mutually_exclusive_group(required=True)
    identifier.add_argument("--nip", help="NIP, or up to 20 separated by commas")
    identifier.add_argument("--regon", help="REGON, or up to 20 separated by commas")
    identifier.add_argument("--krs", help="KRS, or up to 20 separated by commas")

    report = commands.add_parser("report", help="Fetch a full report")
    report.add_argument("--regon", required=True, help="REGON of the entity")
    report.add_argument(
        "--type", default=ReportTypes.REPORT_PUBLIC_LAW, help="Report name, e.g. BIR11OsPrawna"
    )

    bulk = commands.add_parser("bulk", help="Fetch a bulk report")
    bulk.add_argument("--date", required=True, type=date.fromisoformat, help="YYYY-MM-DD")
    bulk.add_argument("--type", required=True, help="Bulk report name")

    commands.add_parser("status", help="Show service status and data date")

    excel = commands.add_parser("excel", help="Look up identifiers listed in a workbook")
    excel.add_argument("--excel", required=True, help="Path to the workbook")
    excel.add_argument("--sheet", default=None, help="Worksheet name (default: active)")
    excel.add_argument("--id-col", default="C", help="Column with identifiers (default: C)")
    excel.add_argument(
        "--id-type", default="nip", choices=["nip", "regon", "krs"], help="Identifier type"
    )
    excel.add_argument("--start", type=int, default=2, help="First row (1-based). Default: 2.")
    excel.add_argument("--end", type=int, help="Last row (1-based, inclusive)")
    excel.add_argument(
        "--mapping-yaml", help="YAML mapping SearchReport fields to columns"
    )
    excel.add_argument(
        "--dry-run", action="store_true", help="Look up only, do not write the workbook"
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger("gusapi").setLevel(level)


def _validate_column(column: str | None) -> str | None:
    if column is None:
        return None
    column = column.strip().upper()
    if not column:
        return None
    if not column.isalpha():
        raise ValueError(f"Invalid column: {column}")
    return column


def _load_mapping(path: str | None) -> dict[str, str]:
    mapping: MutableMapping[str, str] = dict(DEFAULT_MAPPING)
    if not path:
        return dict(mapping)

    mapping_path = Path(path)
    if not mapping_path.exists():
        raise FileNotFoundError(f"Mapping file not found: {mapping_path}")

    data = yaml.safe_load(mapping_path.read_text(encoding="utf-8"))
    if data is None:
        return dict(mapping)
    if not isinstance(data, Mapping):
        raise ValueError("Mapping YAML must contain a dictionary")

    for key, value in data.items():
        if value is None:
            continue
        column = _validate_column(str(value))
        if column is None:
            continue
        mapping[str(key)] = column

    return dict(mapping)


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _search(api: GusApi, args: argparse.Namespace) -> list[SearchReport]:
    if args.nip:
        nips = _split(args.nip)
        return api.get_by_nip(nips[0]) if len(nips) == 1 else api.get_by_nips(nips)
    if args.krs:
        krses = _split(args.krs)
        return api.get_by_krs(krses[0]) if len(krses) == 1 else api.get_by_krses(krses)

    regons = _split(args.regon)
    if len(regons) == 1:
        return api.get_by_regon(regons[0])
    lengths = {len(regon.replace("-", "").replace(" ", "")) for regon in regons}
    if {9, 14} <= lengths:
        raise ValueError(
            "Mixed REGON lengths: pass 9-digit and 14-digit REGONs in separate searches"
        )
    if 14 in lengths:
        return api.get_by_regons14(regons)
    return api.get_by_regons9(regons)


def _run_search(api: GusApi, args: argparse.Namespace) -> int:
    print(dumps(_search(api, args), indent=2))
    return 0


def _run_report(api: GusApi, args: argparse.Namespace) -> int:
    print(dumps(api.get_full_report(args.regon, args.type), indent=2))
    return 0


def _run_bulk(api: GusApi, args: argparse.Namespace) -> int:
    print(dumps(api.get_bulk_report(args.date, args.type), indent=2))
    return 0


def _run_status(api: GusApi, args: argparse.Namespace) -> int:
    status = {
        "service_status": api.service_status(),
        "service_message": api.service_message(),
        "data_status": api.data_status(),
    }
    print(dumps(status, indent=2))
    return 0


def _run_excel(api: GusApi, args: argparse.Namespace) -> int:
    mapping = _load_mapping(args.mapping_yaml)
    id_column = _validate_column(args.id_col)
    if not id_column:
        raise ValueError("Identifier column must not be empty")

    lookup: Callable[[str], list[SearchReport]] = getattr(api, f"get_by_{args.id_type}")

    processed = 0
    hits = 0
    no_result = 0
    errors = 0
    start_time = time.perf_counter()

    rows = excel_io.iter_rows(
        excel_path=args.excel,
        sheet=args.sheet,
        start=args.start,
        end=args.end,
        id_col=id_column,
    )

    for row in rows:
        processed += 1
        identifier = row["identifier"]
        record: dict[str, object]
        try:
            reports = lookup(identifier)
        except NotFoundError:
            logger.debug("No result for %s in row %s", identifier, row["index"])
            no_result += 1
            record = {"notes": "no result"}
        except ValueError as exc:
            logger.warning("Row %s skipped: %s", row["index"], exc)
            errors += 1
            record = {"notes": "invalid identifier"}
        else:
            hits += 1
            record = dict(reports[0].json_serialize())
            record["notes"] = "fetched" if len(reports) == 1 else f"matches={len(reports)}"

        if not args.dry_run:
            excel_io.write_result(
                excel_path=args.excel,
                sheet=args.sheet,
                row_index=row["index"],
                record=record,
                mapping=mapping,
            )

    if not args.dry_run:
        excel_io.save(args.excel)

    duration = time.perf_counter() - start_time
    logger.info(
        "Processing finished: processed=%s hits=%s no_result=%s errors=%s duration=%.2fs",
        processed,
        hits,
        no_result,
        errors,
        duration,
    )

    if errors:
        return 4
    return 0


_COMMANDS: dict[str, Callable[[GusApi, argparse.Namespace], int]] = {
    "search": _run_search,
    "report": _run_report,
    "bulk": _run_bulk,
    "status": _run_status,
    "excel": _run_excel,
}


def _logout(api: GusApi) -> None:
    if not api.get_session_id():
        return
    try:
        api.logout()
    except GusApiError as exc:
        logger.warning("Logout failed: %s", exc)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    dotenv_path = Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)

    try:
        api = GusApi(args.key, args.env)
    except (GusApiError, ValueError) as exc:
        logger.error("Incomplete configuration: %s", exc)
        return 2

    try:
        if args.command != "status":
            api.login()
        return _COMMANDS[args.command](api, args)
    except NotFoundError as exc:
        logger.warning("No result: %s", exc)
        return 1
    except InvalidUserKeyError as exc:
        logger.error("Login rejected: %s", exc)
        return 2
    except (ValueError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2
    except GusApiError as exc:
        logger.error("Aborting on API error: %s", exc)
        return 3
    finally:
        _logout(api)


if __name__ == "__main__":
    raise SystemExit(main())
