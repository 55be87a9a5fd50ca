"""Data source framework seam.

A data source declares its attribute schema and implements ``read(db,
data)``: it pulls its inputs from the attribute bag, fetches from the
database and writes computed attributes back. Raising from ``read``
aborts the read; returning normally means the computed attributes are
ready to be stored.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional

from pydantic import Field

from pgdatasource.common.exceptions import validation_error
from pgdatasource.engine.connection import DBConnection
from pgdatasource.types.base import PGDSBaseModel


class AttributeKind(str, Enum):
    """Shape of an attribute value."""

    STRING = "string"
    LIST = "list"


class Attribute(PGDSBaseModel):
    """Declaration of one data source attribute.

    Attributes:
        name: Attribute name
        kind: STRING or LIST
        required: Must be supplied by the caller
        optional: May be supplied by the caller
        computed: Written by the read
        force_new: Changing the value addresses a different instance
        string_elements: For LIST inputs, elements must be strings
        description: Human readable description
    """
    name: str
    kind: AttributeKind = AttributeKind.STRING
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    string_elements: bool = True
    description: str = Field(default="")

    @property
    def is_input(self) -> bool:
        return self.required or self.optional

    def empty_value(self) -> Any:
        return [] if self.kind == AttributeKind.LIST else ""


def build_schema(*attributes: Attribute) -> Dict[str, Attribute]:
    return {attribute.name: attribute for attribute in attributes}


class ResourceData:
    """Attribute bag passed to ``DataSource.read``.

    Inputs are validated against the schema on construction. ``get``
    returns the input or computed value, or the kind's empty value for
    unset attributes. ``set`` accepts computed attributes only.
    """

    def __init__(self, schema: Mapping[str, Attribute], config: Optional[Mapping[str, Any]] = None):
        self._schema = dict(schema)
        self._config: Dict[str, Any] = {}
        self._computed: Dict[str, Any] = {}
        self._id = ""
        self._validate(dict(config or {}))

    def _validate(self, config: Dict[str, Any]) -> None:
        for key in config:
            attribute = self._schema.get(key)
            if attribute is None:
                raise validation_error(f"Unsupported argument {key!r}", field=key)
            if not attribute.is_input:
                raise validation_error(f"Attribute {key!r} is computed and cannot be set", field=key)

        for name, attribute in self._schema.items():
            if not attribute.is_input:
                continue
            value = config.get(name)
            if value is None:
                if attribute.required:
                    raise validation_error(f"The argument {name!r} is required", field=name)
                continue
            self._config[name] = self._check_kind(attribute, value)

    @staticmethod
    def _check_kind(attribute: Attribute, value: Any) -> Any:
        if attribute.kind == AttributeKind.STRING:
            if not isinstance(value, str):
                raise validation_error(
                    f"{attribute.name} must be a string",
                    field=attribute.name,
                    value=value,
                )
            if attribute.required and not value:
                raise validation_error(f"{attribute.name} must not be empty", field=attribute.name)
            return value

        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise validation_error(f"{attribute.name} must be a list", field=attribute.name, value=value)
        if attribute.string_elements:
            for element in value:
                if not isinstance(element, str):
                    raise validation_error(
                        f"elements of {attribute.name} must be strings",
                        field=attribute.name,
                        value=element,
                    )
        return list(value)

    def get(self, name: str) -> Any:
        attribute = self._schema.get(name)
        if attribute is None:
            raise KeyError(name)
        if name in self._computed:
            return self._computed[name]
        if name in self._config:
            return self._config[name]
        return attribute.empty_value()

    def set(self, name: str, value: Any) -> None:
        attribute = self._schema.get(name)
        if attribute is None or not attribute.computed:
            raise validation_error(f"Attribute {name!r} is not a computed attribute", field=name)
        self._computed[name] = value

    def set_id(self, value: str) -> None:
        self._id = value

    @property
    def id(self) -> str:
        return self._id

    def state(self) -> Dict[str, Any]:
        """Inputs, computed attributes and id as one dictionary."""
        state = {name: self.get(name) for name in self._schema}
        state["id"] = self._id
        return state


class DataSource(ABC):
    """Base class for read-only data sources.

    Subclasses set ``name``, ``description`` and ``schema`` and implement
    ``read``. Instances hold no per-read state and may serve concurrent reads.
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""
    schema: ClassVar[Dict[str, Attribute]] = {}

    def new_resource_data(self, config: Optional[Mapping[str, Any]] = None) -> ResourceData:
        return ResourceData(self.schema, config)

    @property
    def input_names(self) -> List[str]:
        return [name for name, attribute in self.schema.items() if attribute.is_input]

    @property
    def computed_names(self) -> List[str]:
        return [name for name, attribute in self.schema.items() if attribute.computed]

    @abstractmethod
    def read(self, db: DBConnection, data: ResourceData) -> None:
        """Fetch and write computed attributes into ``data``.

        Raises:
            DataSourceError: If the read fails; ``data`` must then be discarded
        """
