"""
Ordered, multi‑valued and immutable request parameters.

Both request variants carry their parameters as a :class:`ParameterMap`.  The
map keeps insertion order of keys and of the values under each key, which is
exactly the order in which the pairs end up in the form‑encoded request body.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

ParamValues = Union[str, Iterable[str]]


class ParameterMap(Mapping[str, Tuple[str, ...]]):
    """
    Read‑only mapping ``name -> (value, ...)``.

    Every key maps to a non‑empty tuple of strings.  Instances are created
    from plain ``(name, values)`` pairs by the request builders and are never
    modified afterwards.
    """

    __slots__ = ("_data",)

    def __init__(self, pairs: Iterable[Tuple[str, ParamValues]] = ()) -> None:
        data: Dict[str, Tuple[str, ...]] = {}
        for name, values in pairs:
            values = _as_tuple(values)
            if not values:
                continue
            data[name] = data.get(name, ()) + values
        self._data = MappingProxyType(data)

    @classmethod
    def of(cls, mapping: Optional[Mapping[str, ParamValues]]) -> "ParameterMap":
        if mapping is None:
            return cls()
        return cls(mapping.items())

    def __getitem__(self, name: str) -> Tuple[str, ...]:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ParameterMap({dict(self._data)!r})"

    def get_first(self, name: str, default: Optional[str] = None) -> Optional[str]:
        values = self._data.get(name)
        return values[0] if values else default

    def form_items(self) -> List[Tuple[str, str]]:
        """
        Flatten the map into ordered ``(name, value)`` pairs.

        Repeated names produce repeated pairs, suitable for the ``data``
        argument of ``requests`` (``application/x-www-form-urlencoded``).
        """
        return [(name, value) for name, values in self._data.items() for value in values]

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._data.items()}


def _as_tuple(values: ParamValues) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)
