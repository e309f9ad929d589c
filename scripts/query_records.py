from __future__ import annotations
import sys
from pathlib import Path as _Path

_ROOT = _Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import argparse
import json
from typing import Any, Dict, List, Optional

from dynamo_records.config.settings import load_settings
from dynamo_records.db.session import connect
from dynamo_records.exceptions.errors import HandlerError
from dynamo_records.handler import RequestContext, get_records
from dynamo_records.logging.logger import init_logging


def _pairs(values: List[str], flag: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for raw in values or []:
        if "=" not in raw:
            raise SystemExit(f"{flag} expects attr=value, got {raw!r}")
        k, v = raw.split("=", 1)
        out[k.strip()] = v
    return out


def _filter_value(raw: str) -> Any:
    # Allow JSON literals (numbers, booleans, null); anything else stays a string.
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch one page of records from a DynamoDB table using equality filters.")
    parser.add_argument("--table", required=True, help="DynamoDB table name.")
    parser.add_argument("--primary-key", dest="primary_key", required=True, help="Partition key attribute of the table.")
    parser.add_argument("--index", action="append", default=[], help="Indexed attribute as attr=index-name (repeatable).")
    parser.add_argument("--filter", action="append", default=[], help="Equality filter as attr=value (repeatable). Values are parsed as JSON when possible.")
    parser.add_argument("--limit", type=int, default=10, help="Maximum number of items to evaluate for this page.")
    parser.add_argument("--start-key", dest="start_key", default=None, help="JSON cursor from a previous page's pagination.last_record_keys.")
    parser.add_argument("--config-dir", dest="config_dir", default="config", help="Directory holding <APP_ENV>.yaml.")
    args = parser.parse_args(argv)

    settings = load_settings(args.config_dir)
    init_logging(settings.log_level, settings.log_file or None)

    payload: Dict[str, Any] = {
        "limit": args.limit,
        "filter": {k: _filter_value(v) for k, v in _pairs(args.filter, "--filter").items()},
    }
    if args.start_key:
        payload["start_key"] = json.loads(args.start_key)

    ctx = RequestContext(
        data={
            "table_name": args.table,
            "primary_key": args.primary_key,
            "index_data": _pairs(args.index, "--index"),
            "token_claims": {},
        },
        store_client=connect(settings),
    )

    try:
        resp = get_records(ctx, payload, settings=settings)
    except HandlerError as e:
        print(json.dumps(e.to_dict(), indent=2))
        return 2

    print(json.dumps(resp, indent=2, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
