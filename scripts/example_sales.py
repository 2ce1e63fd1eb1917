#!/usr/bin/env python3
"""
Example: Totalling a month of sales with a lookup cube.

This script demonstrates how to:
1. Load dated sale records into a cube over month, week and day of week
2. Splice out a single month
3. Collapse the remaining dimensions into a grand total and a sale count
4. Flatten an intermediate cube back into a table
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
import logging
from decimal import Decimal

import pandas as pd

from lookupcube.cube.aggregates import AggregateFunction, collision_combiner, group_aggregator
from lookupcube.cube.engine import Cube
from lookupcube.cube.frame import cube_from_frame, cube_to_frame, summarize
from lookupcube.cube.key import Key, KeyPart
from configs.dimensions import get_dimensions

SALES_2012 = [
    ("2012-01-01", "12.53"), ("2012-01-13", "24.89"), ("2012-01-31", "16.82"),
    ("2012-02-18", "2.34"), ("2012-02-22", "2.34"), ("2012-02-23", "2.34"),
    ("2012-03-03", "2.34"), ("2012-03-12", "2.34"), ("2012-03-29", "2.34"),
    ("2012-03-30", "2.34"), ("2012-04-11", "2.34"), ("2012-05-01", "2.34"),
    ("2012-05-01", "2.34"), ("2012-05-02", "2.34"), ("2012-05-02", "2.34"),
    ("2012-06-22", "2.34"), ("2012-07-05", "2.34"), ("2012-07-14", "2.34"),
    ("2012-07-21", "2.34"), ("2012-08-03", "2.34"), ("2012-09-24", "2.34"),
    ("2012-10-01", "2.34"), ("2012-10-03", "2.34"), ("2012-10-07", "2.34"),
    ("2012-10-11", "2.34"), ("2012-10-16", "2.34"), ("2012-11-17", "2.34"),
    ("2012-11-18", "2.34"), ("2012-12-02", "2.34"), ("2012-12-22", "2.34"),
]


def create_sample_data() -> pd.DataFrame:
    """Create the 2012 sales records with their calendar coordinates."""
    df = pd.DataFrame(SALES_2012, columns=["date", "amount"])
    df["date"] = pd.to_datetime(df["date"])
    df["amount"] = df["amount"].map(Decimal)
    df["month"] = df["date"].dt.month
    df["week"] = df["date"].dt.dayofyear // 7
    df["day_of_week"] = df["date"].dt.day_name()
    return df


def build_sales_cube(df: pd.DataFrame, dimensions) -> Cube:
    """Index the sales by calendar; sales on the same day are summed."""
    return cube_from_frame(
        df, dimensions, "amount", combiner=collision_combiner(AggregateFunction.SUM)
    )


def run_demo(month: int):
    """Run the monthly totals demonstration."""
    print("=" * 60)
    print("Lookup Cube Demo: Monthly Sales")
    print("=" * 60)

    dims = get_dimensions("calendar")
    cube = build_sales_cube(create_sample_data(), dims)
    print(f"\nSales cube: {cube}")
    print(f"Summary: {summarize(cube).get_summary()}")

    month_cube = cube.splice(KeyPart(dims["month"], month))
    total_sum = group_aggregator(AggregateFunction.SUM)
    count = group_aggregator(AggregateFunction.COUNT)

    by_weekday = month_cube.collapse(dims["month"], total_sum).collapse(dims["week"], total_sum)
    print(f"\nSales by day of week for month {month}:")
    print(cube_to_frame(by_weekday, value_column="amount").to_string(index=False))

    if month_cube.is_empty:
        print(f"\nNo sales in month {month}")
        return

    total = by_weekday.collapse(dims["day_of_week"], total_sum)[Key()]
    sales = (month_cube.collapse(dims["month"], count)
             .collapse(dims["week"], count)
             .collapse(dims["day_of_week"], count))[Key()]
    print(f"\nTotal: {total}")
    print(f"Sales: {sales}")


def main():
    parser = argparse.ArgumentParser(description="Total a month of sales with a lookup cube")
    parser.add_argument("--month", type=int, default=1, help="Month to report (1-12)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run_demo(args.month)


if __name__ == "__main__":
    main()
