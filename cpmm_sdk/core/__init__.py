"""
Core swap-engine algorithms: exact fractions, amounts, prices, pool math,
routes, trades and the best-trade search.

Public names are re-exported from the top-level `cpmm_sdk` package.
"""
