#!/usr/bin/env python3
"""
Main script for running the uncertainty propagation examples.
"""

# Examples overview:
# 1) Pairwise arithmetic with quadrature / relative-quadrature propagation.
# 2) Finite-difference propagation through arbitrary functions (first and
#    fourth order), including an ln -> exp round trip.
# 3) numpy arrays of values: element-wise arithmetic and function application.
# 4) A summary table of the results.

import logging
import math
import os
import sys
import time

import numpy as np

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from uncertain import UncertainValue, apply, from_arrays, to_frame


def add_sub_mul_div_example():
    a = UncertainValue(1.0, 0.1)
    b = UncertainValue(2.0, 0.2)
    logging.info("a + b = %s", a + b)
    logging.info("a - b = %s", a - b)
    logging.info("a * b = %s", a * b)
    logging.info("a / b = %s", a / b)


def finite_difference_examples():
    x = UncertainValue(3.14, 0.01)
    logging.info("sin(%s) first order = %r", x, x.apply_first_order(math.sin))
    logging.info("sin(%s) fourth order = %r", x, x.apply_fourth_order(math.sin))
    logging.info("sin(%s) closed form = %r", x, x.sin())

    x = UncertainValue(1.001, 0.00001)
    ln_x = x.apply_fourth_order(math.log)
    logging.info("ln(%r) = %r", x, ln_x)
    logging.info("exp(ln(%r)) = %r", x, ln_x.apply(math.exp))


def array_examples():
    arr = from_arrays([1.0, 2.0, 3.0, 4.0], [0.1, 0.2, 0.3, 0.4])
    logging.info("arr + arr = %s", [str(v) for v in arr + arr])

    sin_arr = apply(arr, np.sin)
    logging.info("sin(arr) = %s", [str(v) for v in sin_arr])
    return sin_arr


def main():
    """Run all examples with timing information."""

    start_time = time.time()
    logging.info("Running uncertainty propagation examples")

    add_sub_mul_div_example()
    finite_difference_examples()
    sin_arr = array_examples()

    table = to_frame(sin_arr, labels=["x1", "x2", "x3", "x4"])
    logging.info("Summary table:\n%s", table.to_string())

    total_duration = time.time() - start_time
    logging.info(f"Total execution time: {total_duration:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
