"""
Minimal example demonstrating order-aware diffing.

Run this with:
    python examples/minimal.py

Then compare the sample capture files with:
    httpdiff examples/requests_before.json examples/requests_after.json
    httpdiff examples/requests_before.json examples/requests_after.json --first 0 --second 0
"""

import os

from httpdiff import OrderedTree, compare_records, diff, format_comparison, load_records

HERE = os.path.dirname(os.path.abspath(__file__))


def main() -> None:
    # Two JSON objects with the same values in a different order
    before = OrderedTree([("id", 1), ("name", "Ada"), ("tags", ["admin"])])
    after = OrderedTree([("name", "Ada"), ("id", 1), ("tags", ["admin", "ops"])])

    patches = diff(before, after)
    print(f"Patches: {patches!r}")
    for patch in patches:
        print(f"  {patch.kind.value:<8} {'.'.join(patch.path)}: {patch.old_value!r} -> {patch.new_value!r}")

    # Whole-record comparison of the sample captures
    first = load_records(os.path.join(HERE, "requests_before.json"))[0]
    second = load_records(os.path.join(HERE, "requests_after.json"))[0]
    print()
    print(format_comparison(compare_records(first, second)))


if __name__ == "__main__":
    main()
