"""
Utility functions for validating and converting inputs
"""

from abc import ABCMeta
from collections.abc import Hashable, Sequence
from functools import cached_property
from typing import Any, Union

import numpy as np
from pandas import DataFrame, Series

from lrvar.typing import ArrayLike, Float64Array1D, NDArray
from lrvar.utility.exceptions import InvalidInputError, invalid_input_error

__all__ = [
    "AbstractDocStringInheritor",
    "DocStringInheritor",
    "ensure1d",
    "series_to_array",
]


def ensure1d(
    x: Union[float, Sequence[Union[int, float]], ArrayLike],
    name: Hashable | None,
) -> NDArray:
    if isinstance(x, Series):
        return x.to_numpy()

    if isinstance(x, DataFrame):
        if x.shape[1] != 1:
            raise InvalidInputError(f"{name} must be squeezable to 1 dimension")
        return x.iloc[:, 0].to_numpy()

    x_arr = np.asarray(x)
    if sum([s > 1 for s in x_arr.shape]) > 1:
        raise InvalidInputError(f"{name} must be squeezable to 1 dimension")
    return x_arr.ravel()


def series_to_array(
    x: Union[Sequence[Union[int, float]], ArrayLike],
    name: str = "x",
    min_nobs: int = 2,
) -> Float64Array1D:
    """
    Validate a time series and return it as a contiguous 1D float64 array

    Parameters
    ----------
    x : {list, ndarray, Series, DataFrame}
        The time series. DataFrames must have a single column.
    name : str, default "x"
        The name of the variable used in error messages.
    min_nobs : int, default 2
        The minimum number of observations required.

    Returns
    -------
    ndarray
        1D float64 array containing a copy of the data.
    """
    arr = np.array(ensure1d(x, name), dtype=np.float64)
    if arr.shape[0] < min_nobs:
        raise InvalidInputError(
            invalid_input_error.format(
                name=name, min_nobs=min_nobs, nobs=arr.shape[0]
            )
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} must contain only finite values.")
    return np.ascontiguousarray(arr)


class DocStringInheritor(type):
    """
    A variation on
    https://groups.google.com/group/comp.lang.python/msg/26f7b4fcb4d66c95
    by Paul McGuire
    """

    def __new__(
        mcs, name: str, bases: tuple[type, ...], clsdict: dict[str, Any]
    ) -> Any:
        if not (clsdict.get("__doc__")):
            for mro_cls in (mro_cls for base in bases for mro_cls in base.mro()):
                doc = mro_cls.__doc__
                if doc:
                    clsdict["__doc__"] = doc
                    break
        for attr, attribute in clsdict.items():
            if not attribute.__doc__:
                for mro_cls in (
                    mro_cls
                    for base in bases
                    for mro_cls in base.mro()
                    if hasattr(mro_cls, attr)
                ):
                    doc = getattr(mro_cls, attr).__doc__
                    if doc:
                        if isinstance(attribute, cached_property):
                            attribute.func.__doc__ = doc
                            clsdict[attr] = cached_property(attribute.func)
                        elif isinstance(attribute, property):
                            clsdict[attr] = property(
                                attribute.__get__,
                                attribute.__set__,
                                attribute.__delete__,
                                doc,
                            )
                        else:
                            attribute.__doc__ = doc
                        break
        return type.__new__(mcs, name, bases, clsdict)


class ConcreteClassMeta(ABCMeta):
    def __init__(cls, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        missing: list[str] = getattr(cls, "__abstractmethods__", [])
        if missing:
            missing_meth = ", ".join(missing)
            raise TypeError(
                f"{cls.__name__} has not implemented abstract methods {missing_meth}"
            )


class AbstractDocStringInheritor(ConcreteClassMeta, DocStringInheritor):
    pass
