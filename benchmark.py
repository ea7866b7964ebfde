import time
import random
import string
import argparse

from filedb.file_db import FileDB
from filedb.errors import Status

ALPHABET = (string.ascii_letters + string.digits).encode("ascii")


def random_value(size):
    return bytes(random.choice(ALPHABET) for _ in range(size))


def timed(func, num_ops):
    """Return (elapsed seconds, operations per second) for one call of func."""
    start = time.perf_counter()
    func()
    elapsed = time.perf_counter() - start
    return elapsed, (num_ops / elapsed if elapsed > 0 else float("inf"))


def run(base_dir, num_ops, value_size):
    db = FileDB("benchmark", base_dir=base_dir)
    db.destroy()
    names = [f"rec_{i}" for i in range(num_ops)]

    def do_put():
        for name in names:
            status = db.put(name, {"value": random_value(value_size)})
            if status != Status.OK:
                raise RuntimeError(f"put {name} failed: {status.name}")

    def do_get():
        for name in names:
            db.get(name)

    def do_delete():
        for name in names:
            db.delete(name)

    results = [
        ("put", timed(do_put, num_ops)),
        ("get", timed(do_get, num_ops)),
        ("delete", timed(do_delete, num_ops)),
    ]
    db.destroy()
    return results


def main():
    parser = argparse.ArgumentParser(description="Time FileDB put/get/delete")
    parser.add_argument("--base-dir", default=".", help="Where to create the scratch database")
    parser.add_argument("--num-ops", type=int, default=5_000, help="Records per phase")
    parser.add_argument("--value-size", type=int, default=100, help="Bytes per record value")
    args = parser.parse_args()

    print(f"{args.num_ops} records, {args.value_size}-byte values")
    for phase, (elapsed, rate) in run(args.base_dir, args.num_ops, args.value_size):
        print(f"{phase:<7}{elapsed:8.3f} s {rate:10.0f} ops/s")


if __name__ == "__main__":
    main()
