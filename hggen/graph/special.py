"""Gauss hypergeometric function outside the unit disk.

The soft RGG expected degree is n * 2F1(1, b; 1 + b; -lambda) with
b = 1/beta = T and lambda >= 1, so the argument sits on or beyond the
radius of convergence of the series. With w = 1 / (1 - z) in (0, 1/2]:

    2F1(1, b; 1 + b; z) = w b / (b - 1) 2F1(1, 1; 2 - b; w)
                          + b pi (1 - w)^(-b) w^b / sin(b pi)

For b = 1 the closed form -ln(1 - z) / z applies. For other integer b the
sin(b pi) term has a pole, so b is nudged by a small epsilon.
"""

import math
from collections.abc import Callable

import scipy.special

# (a, b, c, z) -> 2F1(a, b; c; z) for |z| < 1
Hyp2f1 = Callable[[float, float, float, float], float]

INTEGER_PERTURBATION = 1e-6


def hypergeometric_f(
    a: float,
    b: float,
    c: float,
    z: float,
    hyp2f1: Hyp2f1 = scipy.special.hyp2f1,
) -> float:
    """Evaluate 2F1(1, b; 1 + b; z) for z <= -1.

    Args:
        a: First parameter (the transformation assumes a = 1).
        b: Second parameter, 1/beta.
        c: Third parameter (the transformation assumes c = 1 + b).
        z: Argument, z <= -1.
        hyp2f1: Evaluator of the convergent series for |w| < 1.

    Returns:
        The function value.
    """
    if b == 1.0:
        return -math.log(1.0 - z) / z

    w = 1.0 / (1.0 - z)
    if int(b) == b:
        b += INTEGER_PERTURBATION

    return (
        w * b / (b - 1.0) * float(hyp2f1(1.0, 1.0, 2.0 - b, w))
        + b * math.pi * (1.0 - w) ** (-b) * w**b / math.sin(b * math.pi)
    )
