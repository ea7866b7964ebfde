# main.py

import os
import sys
import logging
import argparse

from filedb.codec import encode
from filedb.errors import InvalidDatabaseName, Status
from filedb.file_db import FileDB


def open_db(args) -> FileDB:
    return FileDB(args.db, base_dir=args.base_dir)


def report(status: Status) -> int:
    print("OK" if status == Status.OK else status.name)
    return 0 if status == Status.OK else 1


# ---------- commands ----------

def cmd_put(args, parser):
    data = {}
    for pair in args.pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            parser.error(f"expected KEY=VALUE, got {pair!r}")
        data[key] = os.fsencode(value)
    with open_db(args) as db:
        return report(db.put(args.record, data, overwrite=args.overwrite))


def cmd_get(args, parser):
    with open_db(args) as db:
        result = db.get(args.record)
    if isinstance(result, Status):
        return report(result)
    # print the stored form so multi-line values stay on one line
    for key in sorted(result):
        line = encode({key: result[key]})
        sys.stdout.write(line.decode("utf-8", "replace") + "\n")
    return 0


def cmd_has(args, parser):
    with open_db(args) as db:
        found = db.has(args.record)
    print("yes" if found else "no")
    return 0 if found else 1


def cmd_delete(args, parser):
    with open_db(args) as db:
        return report(db.delete(args.record))


def cmd_destroy(args, parser):
    with open_db(args) as db:
        return report(db.destroy())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="File system key/value record store CLI"
    )
    parser.add_argument(
        "--base-dir",
        default=".",
        help="Directory the database lives in (default: current directory)",
    )
    parser.add_argument(
        "--db",
        default="data",
        help="Database name (default: data)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # put
    p_put = subparsers.add_parser("put", help="Write a record")
    p_put.add_argument("record")
    p_put.add_argument("pairs", nargs="*", metavar="KEY=VALUE")
    p_put.add_argument(
        "--overwrite", action="store_true", help="Replace an existing record"
    )
    p_put.set_defaults(func=cmd_put)

    # get
    p_get = subparsers.add_parser("get", help="Print a record")
    p_get.add_argument("record")
    p_get.set_defaults(func=cmd_get)

    # has
    p_has = subparsers.add_parser("has", help="Check whether a record exists")
    p_has.add_argument("record")
    p_has.set_defaults(func=cmd_has)

    # delete
    p_del = subparsers.add_parser("delete", help="Delete a record")
    p_del.add_argument("record")
    p_del.set_defaults(func=cmd_delete)

    # destroy
    p_destroy = subparsers.add_parser("destroy", help="Delete the whole database")
    p_destroy.set_defaults(func=cmd_destroy)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if getattr(args, "command", None) is None:
        parser.print_help()
        return 2

    try:
        return args.func(args, parser)
    except InvalidDatabaseName as e:
        print(e, file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
