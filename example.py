"""Example usage of the typeddiff engine."""

import json
import logging

from typeddiff import DiffEngine, EngineConfig, LogLevel, TypeConflictError

# Customer record before an update
before = {
    "id": "CUST-001",
    "name": "Dane",
    "age": 34,
    "married": False,
    "countries": ["JP", "US", "GB", "HK"],
    "address": {"city": "Tokyo", "zip": "100-0001"},
    "updatedAt": "2025-02-02T11:00:00Z",  # Will be ignored
    "metadata": {"traceId": "abc123"},  # Will be ignored
}

# Customer record after the update
after = {
    "id": "CUST-001",
    "name": "Bryan",
    "age": 35,
    "married": True,
    "countries": ["JP", "US", "IN", "US"],
    "address": {"city": "Osaka", "zip": None},
    "nickname": "B",
    "updatedAt": "2025-03-03T09:15:00Z",
    "metadata": {"traceId": "def456"},
}


def main():
    print("=" * 60)
    print("typeddiff - Example")
    print("=" * 60)

    config = EngineConfig(ignore_paths=["$.updatedAt", "$..metadata"])
    engine = DiffEngine(config)

    result = engine.diff(before, after)

    print(f"\nChanges: {result.size()}")
    print(f"Summary: {result.summary()}")

    print("\nDifferences:")
    for kind, item in result.items():
        print(f"  - [{kind.name}] {item.key}: {item.left!r} -> {item.right!r}")

    print("\n" + "-" * 60)
    print("Full JSON Result:")
    print(json.dumps(result.to_dict(), indent=2))


def example_with_conflict():
    """Example that demonstrates a type conflict."""
    print("\n" + "=" * 60)
    print("Example with Type Conflict")
    print("=" * 60)

    engine = DiffEngine(EngineConfig(log_level=LogLevel.ERROR))
    try:
        engine.diff({"value": "zero"}, {"value": 0})
    except TypeConflictError as e:
        print(f"\nError: {e}")
        print(f"Path: {e.path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    main()
    example_with_conflict()
