# debug_estimator.py
import json

from trip_estimator.estimator import estimate_trip
from trip_estimator.formatting import format_currency


def main():
    plan = estimate_trip(
        "Lisbon (LIS)",
        ["Paris (CDG)", "Berlin (BER)", "Rome (FCO)"],
        "2025-08-20",
        "2025-08-10",
        7,
        700,
        {"stopovers": 2, "allowHostels": True},
    )

    print("➡️ Estimator returned:\n")
    print(json.dumps(plan.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    print(f"\nTotal {format_currency(plan.total)}, savings {format_currency(plan.savings)}")


if __name__ == "__main__":
    main()
