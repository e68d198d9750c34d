"""
Typed single-slot connectors between process blocks.

An OutputConnector owns the value its block produces. An InputConnector
either holds a literal value or references an OutputConnector and copies its
value on update_data(). References only point from inputs to outputs, so the
graph carries no back references.

Every write bumps a version counter; blocks compare input revisions to tell
whether a cached result is still current.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class OutputConnector(Generic[T]):

    def __init__(self, name: str, data: Optional[T] = None):
        self.name = name
        self._data = data
        self.version = 0 if data is None else 1

    @property
    def data(self) -> Optional[T]:
        return self._data

    def set_data(self, data: T) -> None:
        self._data = data
        self.version += 1

    def __repr__(self) -> str:
        return f"OutputConnector({self.name!r}, version={self.version})"


class InputConnector(Generic[T]):

    def __init__(self, name: str, data: Optional[T] = None, required: bool = True):
        self.name = name
        self.required = required
        self._data = data
        self._source: Optional[OutputConnector[T]] = None
        self._literal_version = 0 if data is None else 1
        self._wiring_version = 0

    @property
    def data(self) -> Optional[T]:
        return self._data

    @property
    def source(self) -> Optional[OutputConnector[T]]:
        return self._source

    @property
    def is_connected(self) -> bool:
        return self._source is not None

    @property
    def is_bound(self) -> bool:
        """True when the connector has a source or holds literal data."""
        return self._source is not None or self._data is not None

    @property
    def revision(self) -> tuple:
        if self._source is not None:
            return (self._wiring_version, self._source.version)
        return (self._wiring_version, self._literal_version)

    def connect_to_output(self, output: OutputConnector[T]) -> None:
        self._source = output
        self._data = output.data
        self._wiring_version += 1

    def disconnect(self) -> None:
        """Drop the source and the value pulled from it; the input is unbound afterwards."""
        self._source = None
        self._data = None
        self._wiring_version += 1

    def set_data(self, data: T) -> None:
        """Hold a literal value. Replaces any connected source."""
        if self._source is not None:
            self.disconnect()
        self._data = data
        self._literal_version += 1

    def update_data(self) -> None:
        """Pull the current value from the connected source, if any."""
        if self._source is not None:
            self._data = self._source.data

    def __repr__(self) -> str:
        origin = self._source.name if self._source is not None else "literal"
        return f"InputConnector({self.name!r}, source={origin})"


class DataSource(Generic[T]):
    """Literal value published through an OutputConnector, e.g. a chain inlet."""

    def __init__(self, data: Optional[T] = None, name: str = "data_source"):
        self.output = OutputConnector(name, data)

    @property
    def data(self) -> Optional[T]:
        return self.output.data

    def set_data(self, data: T) -> None:
        self.output.set_data(data)
