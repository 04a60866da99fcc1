"""Reference field data: f(x) = 11 + 5x + 9x^2 over GF(2089)."""

REFERENCE_COEFFICIENTS = [11, 5, 9]
REFERENCE_SHARES = [(1, 25), (2, 57), (3, 107), (4, 175), (5, 261)]
