"""
Basic Transform sub-classes
"""
import numpy as np
import flowutils
from ._base_transform import Transform


class LinearTransform(Transform):
    """
    Linear scaling of channel values, the GatingML 2.0 "flin" transform:

    flin(x, T, A) = (x + A) / (T + A)

    -A maps to 0 and T maps to 1. Values outside [-A, T] are scaled the same way.

    :param param_t: top of scale value (e.g. 262144)
    :param param_a: offset, -A is the bottom of scale value
    """
    def __init__(self, param_t, param_a=0.0):
        Transform.__init__(self)

        if param_t + param_a == 0:
            raise ValueError("param_t + param_a must be non-zero")

        self.param_a = float(param_a)
        self.param_t = float(param_t)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f't: {self.param_t}, a: {self.param_a})'
        )

    def _apply(self, events):
        return (events + self.param_a) / (self.param_t + self.param_a)

    def _inverse(self, events):
        return (events * (self.param_t + self.param_a)) - self.param_a


class LogTransform(Transform):
    """
    Logarithmic scaling of channel values, the GatingML 2.0 "flog" transform:

    flog(x, T, M) = log10(x / T) / M + 1

    T maps to 1 and M decades below T fill the unit interval. Only positive
    values are in the domain, anything else raises OutOfDomainError.

    :param param_t: top of scale value (e.g. 262144)
    :param param_m: number of decades
    """
    def __init__(self, param_t, param_m):
        Transform.__init__(self)

        if param_t <= 0 or param_m <= 0:
            raise ValueError("param_t and param_m must be positive")

        self.param_m = float(param_m)
        self.param_t = float(param_t)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f't: {self.param_t}, m: {self.param_m})'
        )

    def _apply(self, events):
        # log10 of a non-positive value is NaN or -inf, caught as out of domain
        return (np.log10(events / self.param_t) / self.param_m) + 1.0

    def _inverse(self, events):
        return self.param_t * np.power(10.0, (events - 1.0) * self.param_m)


class LogicleTransform(Transform):
    """
    Logicle scaling of channel values (the GatingML 2.0 "logicle" transform),
    computed by flowutils. Logicle is the inverse of a biexponential function:
    close to linear around zero and close to logarithmic for large values, so
    negative values from compensation or background subtraction stay on scale.

    Reference: Moore WA and Parks DR. Update for the logicle data scale including
    operational code implementations. Cytometry A., 2012:81A(4):273-277.

    :param param_t: top of scale value, mapped to 1 (e.g. 262144)
    :param param_w: width of the near-linear region in decades, in [0, M / 2]
    :param param_m: decades spanned by the full scale
    :param param_a: extra decades of negative values
    """
    def __init__(
        self,
        param_t,
        param_w,
        param_m,
        param_a=0.0
    ):
        Transform.__init__(self)

        if param_t <= 0:
            raise ValueError("param_t must be positive")
        if param_w < 0 or param_w > param_m / 2.0:
            raise ValueError("param_w must be in the interval [0, param_m / 2]")

        self.param_a = float(param_a)
        self.param_m = float(param_m)
        self.param_t = float(param_t)
        self.param_w = float(param_w)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f't: {self.param_t}, w: {self.param_w}, '
            f'm: {self.param_m}, a: {self.param_a})'
        )

    def _apply(self, events):
        return flowutils.transforms.logicle(
            events,
            None,
            t=self.param_t,
            m=self.param_m,
            w=self.param_w,
            a=self.param_a
        )

    def _inverse(self, events):
        return flowutils.transforms.logicle_inverse(
            events,
            None,
            t=self.param_t,
            m=self.param_m,
            w=self.param_w,
            a=self.param_a
        )


class AsinhTransform(Transform):
    """
    Inverse hyperbolic sine scaling of channel values (the GatingML 2.0
    "fasinh" transform), computed by flowutils. T maps to 1 and large values
    behave like a log scale.

    :param param_t: top of scale value (e.g. 262144)
    :param param_m: decades spanned by the scale
    :param param_a: extra decades of negative values
    """
    def __init__(
        self,
        param_t,
        param_m,
        param_a=0.0
    ):
        Transform.__init__(self)

        self.param_a = float(param_a)
        self.param_m = float(param_m)
        self.param_t = float(param_t)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f't: {self.param_t}, m: {self.param_m}, a: {self.param_a})'
        )

    def _apply(self, events):
        return flowutils.transforms.asinh(
            events,
            None,
            t=self.param_t,
            m=self.param_m,
            a=self.param_a
        )

    def _inverse(self, events):
        return flowutils.transforms.asinh_inverse(
            events,
            None,
            t=self.param_t,
            m=self.param_m,
            a=self.param_a
        )
